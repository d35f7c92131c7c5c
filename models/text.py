import re
from collections import Counter
from typing import Dict, List, Optional, Sequence

_STRIP_RE = re.compile(r'[^a-z0-9+#.\-\s]')
_SPACE_RE = re.compile(r'\s+')


def normalize(text: Optional[str]) -> str:
    """Lowercase, replace anything outside [a-z0-9+#.-] with spaces, collapse whitespace."""
    cleaned = _STRIP_RE.sub(' ', (text or '').lower())
    return _SPACE_RE.sub(' ', cleaned).strip()


def tokenize(text: Optional[str]) -> List[str]:
    return [t for t in normalize(text).split(' ') if t]


def term_frequency(tokens: Sequence[str]) -> Dict[str, float]:
    # empty input divides by 1, giving an empty map rather than an error
    total = len(tokens) or 1
    return {term: count / total for term, count in Counter(tokens).items()}
