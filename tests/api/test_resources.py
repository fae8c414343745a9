"""API resource tests."""

from datetime import date
from uuid import uuid4

import pytest
from falcon.testing import TestClient

from edidocs.application.dto import Attachment
from edidocs.config import Settings
from edidocs.domain.value_objects import Mirrored
from edidocs.interfaces.api.resources.health import HealthResource
from edidocs.main import build_services, create_api

from tests.conftest import (
    FakeCatalogSource,
    FakeFetcher,
    FakeTextExtractor,
    make_document,
    make_general_document,
)


@pytest.fixture
def client(uow_factory) -> TestClient:
    services = build_services(
        Settings(_env_file=None),
        uow_factory,
        FakeFetcher(),
        catalog_source=FakeCatalogSource(),
        text_extractor=FakeTextExtractor(),
    )
    return TestClient(create_api(services, HealthResource()))


def _seed(uow):
    ahb = make_document(
        document_date=date(2020, 10, 1),
        is_latest_version=True,
        check_identifiers={11001: [1], 55002: [2, 3]},
        mirror=Mirrored("UTILMD_AHB_6_0a.pdf"),
    )
    old_ahb = make_document(document_date=date(2019, 10, 1))
    mig = make_document(
        "APERAK MIG 2.1a",
        is_mig=True,
        is_ahb=False,
        bdew_process=None,
        contained_message_types=("APERAK",),
        message_type_version="2.1a",
        document_date=date(2014, 4, 1),
        is_latest_version=True,
    )
    general = make_general_document(document_date=date(2021, 1, 1))
    uow.documents.add(ahb, Attachment("UTILMD_AHB_6_0a.pdf", b"%PDF-1.4 ahb"))
    for doc in (old_ahb, mig, general):
        uow.documents.add(doc)
    return ahb, old_ahb, mig, general


class TestDocuments:
    def test_list_all(self, client, uow) -> None:
        ahb, old_ahb, mig, general = _seed(uow)

        result = client.simulate_get("/v1/documents")

        assert result.status_code == 200
        ids = [d["id"] for d in result.json["documents"]]
        assert ids == [str(general.id), str(ahb.id), str(old_ahb.id), str(mig.id)]

    def test_filters(self, client, uow) -> None:
        ahb, _, mig, _ = _seed(uow)

        latest = client.simulate_get("/v1/documents", params={"latest": "true", "kind": "ahb"})
        migs = client.simulate_get("/v1/documents", params={"kind": "mig"})
        by_process = client.simulate_get("/v1/documents", params={"bdew_process": "GPKE GeLi Gas"})

        assert [d["id"] for d in latest.json["documents"]] == [str(ahb.id)]
        assert [d["id"] for d in migs.json["documents"]] == [str(mig.id)]
        assert len(by_process.json["documents"]) == 2

    def test_invalid_kind(self, client) -> None:
        result = client.simulate_get("/v1/documents", params={"kind": "pdf"})
        assert result.status_code == 400

    def test_get_document(self, client, uow) -> None:
        ahb, *_ = _seed(uow)

        result = client.simulate_get(f"/v1/documents/{ahb.id}")

        assert result.status_code == 200
        body = result.json
        assert body["kind"] == "ahb"
        assert body["bdew_process"] == "GPKE GeLi Gas"
        assert body["document_date"] == "2020-10-01"
        assert body["valid_to"] is None
        assert body["filename"] == "UTILMD_AHB_6_0a.pdf"
        assert body["check_identifiers"] == {"11001": [1], "55002": [2, 3]}

    def test_get_document_not_found(self, client) -> None:
        result = client.simulate_get(f"/v1/documents/{uuid4()}")
        assert result.status_code == 404

    def test_get_document_invalid_uuid(self, client) -> None:
        result = client.simulate_get("/v1/documents/not-a-uuid")
        assert result.status_code == 400

    def test_download_file(self, client, uow) -> None:
        ahb, old_ahb, *_ = _seed(uow)

        result = client.simulate_get(f"/v1/documents/{ahb.id}/file")
        missing = client.simulate_get(f"/v1/documents/{old_ahb.id}/file")

        assert result.status_code == 200
        assert result.content == b"%PDF-1.4 ahb"
        assert result.headers["content-type"] == "application/pdf"
        assert "UTILMD_AHB_6_0a.pdf" in result.headers["content-disposition"]
        assert missing.status_code == 404


def test_check_identifiers(client, uow) -> None:
    _seed(uow)

    result = client.simulate_get("/v1/check-identifiers")

    assert result.status_code == 200
    assert result.json["check_identifiers"] == [11001, 55002]


def test_health_route(client) -> None:
    assert client.simulate_get("/v1/health").json["status"] == "ok"
