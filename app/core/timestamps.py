from datetime import datetime, timezone

# Fixed width so stored timestamps sort chronologically as strings.
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(TIMESTAMP_FORMAT)


def utc_timestamp() -> str:
    return format_timestamp(datetime.now(timezone.utc))
