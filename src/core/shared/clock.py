"""
Relógio do domínio.

Serviços que dependem do "agora" recebem um ``Clock`` no construtor,
o que permite congelar o tempo nos testes sem patch global.
"""

from datetime import datetime, timezone
from typing import Callable

from .exceptions import ValidationError

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Instante atual com timezone UTC."""
    return datetime.now(timezone.utc)


def to_epoch_ms(value: datetime) -> int:
    """Converte datetime para milissegundos desde a época."""
    return int(value.timestamp() * 1000)


def parse_instant(value, field_name: str) -> datetime:
    """
    Converte epoch em milissegundos ou string ISO-8601 em datetime UTC.

    Raises:
        ValidationError: Se o valor não for um instante válido
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a timestamp", field=field_name)
    elif isinstance(value, (int, float)):
        parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(
                f"{field_name} must be an ISO-8601 timestamp", field=field_name
            )
    else:
        raise ValidationError(f"{field_name} must be a timestamp", field=field_name)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def isoformat_or_none(value):
    return value.isoformat() if value else None
