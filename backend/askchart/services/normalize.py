import re

# known language tags only, so ```SELECT is never eaten as a tag
_FENCE = re.compile(r"```(?:(?:sql|mysql|sqlite|postgresql|json)\b)?[ \t]*\n?", re.IGNORECASE)

def strip_fences(text: str) -> str:
    # Remove fences if the model wraps its answer
    return _FENCE.sub("", text.strip()).strip()

def normalize_sql(raw: str) -> str:
    """Pull a single SQL statement out of a chatty completion.

    Fences and trailing semicolons go first. If several lines remain, the
    first one that starts with SELECT wins; otherwise the cleaned text is
    returned as is and validation decides what to do with it.
    """
    sql = strip_fences(raw)
    sql = re.sub(r";+$", "", sql).strip()

    lines = sql.split("\n")
    if len(lines) > 1:
        for line in lines:
            candidate = line.strip()
            if candidate.upper().startswith("SELECT"):
                return re.sub(r";+$", "", candidate).strip()
    return sql
