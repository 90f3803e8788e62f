# Centralized regulatory constants to prevent drift between generator, validator and export.

# DEA Form 222 carries at most 10 order lines.
FORM222_MAX_LINES = 10
FORM222_TITLE = "DEA Form 222"

# Catalog default when a line item has no package size. Not a regulatory default.
DEFAULT_PACKAGE_SIZE = "100"

# Registrant DEA number: 2 uppercase letters + 7 digits.
DEA_NUMBER_PATTERN = r"[A-Z]{2}[0-9]{7}"

FORM41_TITLE = "DEA Form 41"
FORM41_SUBTITLE = "Registrants Inventory of Drugs Surrendered"
FORM41_ID_PREFIX = "DEA41"
FORM41_MIN_WITNESSES = 2
