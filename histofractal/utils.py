# histofractal/utils.py
import re

_PAIR = re.compile(r"^\(?\s*([^,()]+)\s*,\s*([^,()]+)\s*\)?$")


def parse_complex(s: str) -> complex:
    """
    Parse strings like '-0.787+0.25j', '0.3-0.5j' or '-0.787,0.25' into a complex number.
    """
    s = s.strip().lower().replace(" ", "")
    m = _PAIR.match(s)
    if m:
        return complex(float(m.group(1)), float(m.group(2)))
    if s.endswith("j") and ("+" in s[1:] or "-" in s[1:]):
        return complex(s)
    if s.endswith("j"):
        return complex(0.0, float(s[:-1] or 1.0))
    # allow plain real numbers too
    return complex(float(s), 0.0)


def clamp(v, vmin, vmax):
    return max(vmin, min(v, vmax))
