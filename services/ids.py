# SQLite INTEGER and Postgres BIGINT are both signed 64-bit
MAX_ROW_ID = 2**63 - 1


def parse_row_id(value):
    """
    Turn a submitted primary key into an int the database can bind.

    Returns None for anything that cannot name a row: blanks, non-integers,
    and numbers outside 1..MAX_ROW_ID.
    """
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    if number < 1 or number > MAX_ROW_ID:
        return None
    return number
