# school_admin/utils/sorting.py
import re
import unicodedata
from typing import Tuple, Union

_DIGIT_RUNS = re.compile(r"(\d+)")


def natural_sort_key(value: str) -> Tuple[Union[str, int], ...]:
    """Accent- and case-insensitive key that orders digit runs numerically.

    "Student 2" sorts before "Student 10", and "Émile" sorts with "emile".
    re.split with a capturing group alternates text and digits, so tuples
    compare str against str and int against int position by position.
    """
    decomposed = unicodedata.normalize("NFKD", value or "")
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    parts = _DIGIT_RUNS.split(base)
    return tuple(int(part) if index % 2 else part for index, part in enumerate(parts))
