"""EDIFACT message types, process families and check identifier prefixes."""

MESSAGE_TYPES: tuple[str, ...] = (
    "APERAK",
    "CONTRL",
    "IFTSTA",
    "INSRPT",
    "INVOIC",
    "MSCONS",
    "ORDERS",
    "ORDRSP",
    "PRICAT",
    "QUOTES",
    "REMADV",
    "REQOTE",
    "UTILMD",
    "COMDIS",
    "UTILTS",
    "PARTIN",
    "ORDCHG",
)

# Documents of the certificate-of-origin registry never name their message types.
HKNR_MARKER = "Herkunftsnachweisregister"
HKNR_DEFAULT_MESSAGE_TYPES: tuple[str, ...] = ("ORDERS", "ORDRSP", "UTILMD", "MSCONS")

# process name -> keyword variants found in titles (HTML entities included)
BDEW_PROCESSES: dict[str, tuple[str, ...]] = {
    "GPKE GeLi Gas": ("GPKE GeLi Gas",),
    "MaBiS": ("MaBiS",),
    "MaLo": ("MaLo",),
    "WiM": ("WiM",),
    "Einspeiser": ("Einspeiser",),
    "Netzbetreiberwechsel": ("Netzbetreiberwechsel",),
    "Geschäftsdatenanfrage": ("Geschäftsdatenanfrage", "Gesch&auml;ftsdatenanfrage"),
    "HKNR": ("HKNR", HKNR_MARKER),
    "Stammdatenänderung": ("Stammdatenänderung", "Stammdaten&auml;nderung"),
    "Zählzeitdefinitionen": ("Zählzeitdefinitionen", "Z&auml;hlzeitdefinitionen"),
    "Berechnungsformel": ("Berechnungsformel",),
}

# message type -> reserved two digit prefixes of its check identifiers
CHECK_IDENTIFIER_PREFIXES: dict[str, tuple[str, ...]] = {
    "UTILMD": ("11", "44", "55"),
    "MSCONS": ("13",),
    "QUOTES": ("15",),
    "ORDERS": ("17",),
    "ORDRSP": ("19",),
    "IFTSTA": ("21",),
    "INSRPT": ("23",),
    "UTILTS": ("25",),
    "PRICAT": ("27",),
    "COMDIS": ("29",),
    "INVOIC": ("31",),
    "REMADV": ("33",),
    "REQOTE": ("35",),
}

GERMAN_MONTHS: dict[str, int] = {
    "januar": 1,
    "jänner": 1,
    "februar": 2,
    "märz": 3,
    "m&auml;rz": 3,
    "maerz": 3,
    "april": 4,
    "mai": 5,
    "juni": 6,
    "juli": 7,
    "august": 8,
    "september": 9,
    "oktober": 10,
    "november": 11,
    "dezember": 12,
}
