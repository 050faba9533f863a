from datetime import datetime, timezone


def utcnow_iso() -> str:
    """
    Текущее время в UTC в формате ISO-8601 с миллисекундами и суффиксом Z.
    """
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return now.replace("+00:00", "Z")
