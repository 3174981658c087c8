"""npm version range matching.

TIER 0: No internal imports, only Python stdlib.

Implements the range grammar found in package.json dependency entries:
unions (||), hyphen ranges, caret, tilde, primitive comparators and
x-ranges. Each range is desugared into sets of primitive comparators,
the same way npm does it, then tested against a version.
"""

import operator
import re

# Parsed version: (major, minor, patch, prerelease identifiers)
Version = tuple[int, int, int, tuple[str, ...]]
Comparator = tuple[str, Version]

VERSION_RE = re.compile(
    r"^v?(\d+)\.(\d+)\.(\d+)(?:-([0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?$"
)
PARTIAL_RE = re.compile(
    r"^v?(\d+|[xX*])"
    r"(?:\.(\d+|[xX*])"
    r"(?:\.(\d+|[xX*])(?:-([0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?)?)?$"
)
COMPARATOR_RE = re.compile(r"^(\^|~>|~|>=|<=|>|<|=)?(.*)$")
HYPHEN_RE = re.compile(r"^(\S+)\s+-\s+(\S+)$")
OPERATOR_SPACE_RE = re.compile(r"(\^|~>|~|>=|<=|>|<|=)\s+")

WILDCARDS = ("x", "X", "*")

ZERO: Version = (0, 0, 0, ())
MATCH_ANY: list[Comparator] = [(">=", ZERO)]
# Lowest possible version, nothing sorts below it
MATCH_NONE: list[Comparator] = [("<", (0, 0, 0, ("0",)))]

_OPERATORS = {
    "=": operator.eq,
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}


def parse_version(text: str) -> Version | None:
    """Parse a full semantic version such as "1.2.3" or "2.0.0-rc.1".

    Args:
        text: Version string.

    Returns:
        Parsed version tuple, or None if the text is not a valid version.
    """
    match = VERSION_RE.match(text.strip())
    if not match:
        return None
    prerelease = tuple(match.group(4).split(".")) if match.group(4) else ()
    return int(match.group(1)), int(match.group(2)), int(match.group(3)), prerelease


def _sort_key(version: Version) -> tuple:
    """Precedence key: a release sorts above its own prereleases."""
    major, minor, patch, prerelease = version
    identifiers = tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part) for part in prerelease
    )
    return major, minor, patch, 0 if prerelease else 1, identifiers


def compare(a: Version, b: Version) -> int:
    """Compare two versions.

    Returns:
        -1, 0 or 1 as a is lower than, equal to or higher than b.
    """
    key_a, key_b = _sort_key(a), _sort_key(b)
    return (key_a > key_b) - (key_a < key_b)


def _parse_partial(text: str) -> tuple[int | None, int | None, int | None, tuple[str, ...]] | None:
    """Parse a possibly incomplete version, with None for missing parts."""
    match = PARTIAL_RE.match(text)
    if not match:
        return None

    parts: list[int | None] = []
    for group in match.group(1, 2, 3):
        if group is None or group in WILDCARDS or (parts and parts[-1] is None):
            parts.append(None)
        else:
            parts.append(int(group))

    prerelease: tuple[str, ...] = ()
    if match.group(4) and parts[2] is not None:
        prerelease = tuple(match.group(4).split("."))
    return parts[0], parts[1], parts[2], prerelease


def _upper(major: int, minor: int = 0, patch: int = 0) -> Comparator:
    """Exclusive upper bound that also excludes prereleases of the bound."""
    return ("<", (major, minor, patch, ("0",)))


def _xrange(major, minor, patch, prerelease) -> list[Comparator]:
    if major is None:
        return MATCH_ANY
    if minor is None:
        return [(">=", (major, 0, 0, ())), _upper(major + 1)]
    if patch is None:
        return [(">=", (major, minor, 0, ())), _upper(major, minor + 1)]
    return [("=", (major, minor, patch, prerelease))]


def _tilde(major, minor, patch, prerelease) -> list[Comparator]:
    if major is None:
        return MATCH_ANY
    if minor is None:
        return [(">=", (major, 0, 0, ())), _upper(major + 1)]
    if patch is None:
        return [(">=", (major, minor, 0, ())), _upper(major, minor + 1)]
    return [(">=", (major, minor, patch, prerelease)), _upper(major, minor + 1)]


def _caret(major, minor, patch, prerelease) -> list[Comparator]:
    if major is None:
        return MATCH_ANY
    if minor is None:
        return [(">=", (major, 0, 0, ())), _upper(major + 1)]
    if patch is None:
        if major == 0:
            return [(">=", (0, minor, 0, ())), _upper(0, minor + 1)]
        return [(">=", (major, minor, 0, ())), _upper(major + 1)]

    lower: Comparator = (">=", (major, minor, patch, prerelease))
    if major != 0:
        return [lower, _upper(major + 1)]
    if minor != 0:
        return [lower, _upper(0, minor + 1)]
    return [lower, _upper(0, 0, patch + 1)]


def _primitive(op: str, major, minor, patch, prerelease) -> list[Comparator]:
    if major is None:
        # ">*" and "<*" can never match, ">=*" and "<=*" match everything
        return MATCH_NONE if op in (">", "<") else MATCH_ANY

    if minor is not None and patch is not None:
        return [(op, (major, minor, patch, prerelease))]

    if op == ">":
        if minor is None:
            return [(">=", (major + 1, 0, 0, ()))]
        return [(">=", (major, minor + 1, 0, ()))]
    if op == ">=":
        return [(">=", (major, minor or 0, 0, ()))]
    if op == "<":
        return [_upper(major, minor or 0)]
    # "<="
    if minor is None:
        return [_upper(major + 1)]
    return [_upper(major, minor + 1)]


def _hyphen(low_text: str, high_text: str) -> list[Comparator] | None:
    low = _parse_partial(low_text)
    high = _parse_partial(high_text)
    if low is None or high is None:
        return None

    comparators: list[Comparator] = []
    major, minor, patch, prerelease = low
    if major is not None:
        comparators.append((">=", (major, minor or 0, patch or 0, prerelease)))

    major, minor, patch, prerelease = high
    if major is None:
        pass
    elif minor is None:
        comparators.append(_upper(major + 1))
    elif patch is None:
        comparators.append(_upper(major, minor + 1))
    else:
        comparators.append(("<=", (major, minor, patch, prerelease)))

    return comparators or MATCH_ANY


def _expand(op: str, text: str) -> list[Comparator] | None:
    partial = _parse_partial(text)
    if partial is None:
        return None
    if op in ("", "="):
        return _xrange(*partial)
    if op == "^":
        return _caret(*partial)
    if op in ("~", "~>"):
        return _tilde(*partial)
    return _primitive(op, *partial)


def parse_range(text: str) -> list[list[Comparator]] | None:
    """Desugar an npm range into comparator sets.

    Args:
        text: Range such as "^1.2.0", ">=1.0.0 <2.0.0" or "1.x || 2.x".

    Returns:
        List of comparator sets (a version must satisfy every comparator
        of at least one set), or None if the range is not valid.
    """
    sets: list[list[Comparator]] = []

    for alternative in text.split("||"):
        alternative = OPERATOR_SPACE_RE.sub(r"\1", alternative.strip())

        hyphen = HYPHEN_RE.match(alternative)
        if hyphen:
            comparators = _hyphen(hyphen.group(1), hyphen.group(2))
            if comparators is None:
                return None
            sets.append(comparators)
            continue

        comparators = []
        for token in alternative.split():
            match = COMPARATOR_RE.match(token)
            expanded = _expand(match.group(1) or "", match.group(2))
            if expanded is None:
                return None
            comparators.extend(expanded)
        sets.append(comparators or MATCH_ANY)

    return sets


def _test_set(comparators: list[Comparator], version: Version) -> bool:
    for op, target in comparators:
        if not _OPERATORS[op](_sort_key(version), _sort_key(target)):
            return False

    if not version[3]:
        return True

    # Prereleases only match when the range opts in on the same release line
    return any(target[3] and target[:3] == version[:3] for _, target in comparators)


def satisfies(version: str, range_text: str) -> bool:
    """Check if a version is admitted by an npm range.

    Invalid versions and invalid ranges (tags such as "latest", git URLs)
    satisfy nothing.

    Args:
        version: Version string, e.g. "1.2.3".
        range_text: npm range string, e.g. "^1.0.0".

    Returns:
        True if the version satisfies the range.
    """
    parsed = parse_version(version)
    sets = parse_range(range_text)
    if parsed is None or sets is None:
        return False
    return any(_test_set(comparators, parsed) for comparators in sets)
