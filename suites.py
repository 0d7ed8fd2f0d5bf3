import string
from typing import Dict

Alpha26 = string.ascii_uppercase
Alpha38 = Alpha26 + "0123456789#/"
Alpha60 = Alpha38 + "+-*=()[]{}<>!?@&^%$£€_"

SUITES: Dict[int, Dict[str, str]] = {
    1: {"name": "lower",   "alphabet": string.ascii_lowercase},
    2: {"name": "alpha26", "alphabet": Alpha26},
    3: {"name": "alpha38", "alphabet": Alpha38},
    4: {"name": "alpha60", "alphabet": Alpha60},
    5: {"name": "alnum",   "alphabet": string.ascii_letters + string.digits},
}


def resolve_charset(value: str) -> str:
    """Suite number or name → its alphabet; anything else is taken literally."""
    if value.isdigit() and int(value) in SUITES:
        return SUITES[int(value)]["alphabet"]
    for suite in SUITES.values():
        if suite["name"] == value.lower():
            return suite["alphabet"]
    return value
