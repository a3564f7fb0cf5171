"""Convert timedeltas to and from strings, using a format based on Go's Duration format (e.g. "50ms", "1m30s")."""
import datetime
import decimal
import re

UNITS = {
    "h": datetime.timedelta(hours=1),
    "m": datetime.timedelta(minutes=1),
    "s": datetime.timedelta(seconds=1),
    "ms": datetime.timedelta(milliseconds=1),
    "us": datetime.timedelta(microseconds=1),
}

# "ms" must be tried before "m" and "s".
PART_MATCHER = re.compile(r"(\d+(?:\.\d*)?)(ms|us|h|m|s)")


def _maybe_int(val: float):
    return int(val) if val.is_integer() else val


def format_duration(val: datetime.timedelta) -> str:
    if val == datetime.timedelta():
        return "0"
    sign = ""
    if val < datetime.timedelta():
        sign = "-"
        val = -val

    # sub-second durations are written as a single unit
    if val < UNITS["ms"]:
        return f"{sign}{val.microseconds}us"
    if val < UNITS["s"]:
        return f"{sign}{_maybe_int(val / UNITS['ms'])}ms"

    parts = [sign]
    for unit in ("h", "m"):
        count, val = divmod(val, UNITS[unit])
        if count:
            parts.append(f"{count}{unit}")
    if val:
        parts.append(f"{_maybe_int(val.total_seconds())}s")
    return "".join(parts)


def parse_duration(val: str) -> datetime.timedelta:
    sign = 1
    if val[:1] in ("-", "+"):
        sign = -1 if val[0] == "-" else 1
        val = val[1:]
    if not val:
        raise ValueError("Empty duration string")
    if val == "0":
        return datetime.timedelta()

    accum = datetime.timedelta()
    pos = 0
    while pos < len(val):
        match = PART_MATCHER.match(val, pos)
        if match is None:
            raise ValueError(f"Invalid duration string {val!r} at position {pos}")
        number = decimal.Decimal(match.group(1))
        unit = UNITS[match.group(2)]
        num, denom = number.as_integer_ratio()
        accum += num * unit / denom
        pos = match.end()
    return sign * accum
