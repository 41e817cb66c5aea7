import logging
from typing import Any

logger = logging.getLogger("formbuilder.audit")


def log_event(
    *,
    action: str,
    entity_type: str,
    entity_id,
    metadata: dict[str, Any] | None = None,
):
    logger.info(
        "%s %s=%s %s",
        action,
        entity_type,
        entity_id,
        metadata or {},
        extra={
            "action": action,
            "entity_type": entity_type,
            "entity_id": entity_id,
            "event_metadata": metadata,
        },
    )
