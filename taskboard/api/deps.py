import re

from fastapi import HTTPException

from taskboard.schemas.common import MAX_ID

ID_RE = re.compile(r"[0-9]+")


def parse_id(raw_id: str, entity: str) -> int:
    """
    Идентификатор в пути приходит строкой; всё, что не положительное целое
    в пределах INTEGER SQLite, это 400.
    """
    raw_id = raw_id.strip()
    if (not ID_RE.fullmatch(raw_id) or len(raw_id) > len(str(MAX_ID))
            or not 0 < int(raw_id) <= MAX_ID):
        raise HTTPException(status_code=400, detail=f"Invalid {entity} ID")
    return int(raw_id)
