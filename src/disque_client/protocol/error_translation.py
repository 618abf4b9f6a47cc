"""Translation of broker error replies into domain errors."""

from __future__ import annotations

from collections.abc import Mapping

from disque_client.domain.errors import (
    BrokerError,
    DelayExceedsTTLError,
    DisqueError,
    QueuePausedError,
    TooLateToPostponeError,
    UnknownJobError,
)

# Reasons are matched verbatim, code token and punctuation included.
BROKER_ERROR_TRANSLATIONS: Mapping[str, Mapping[str, type[DisqueError]]] = {
    "ADDJOB": {
        "PAUSED Queue paused in input, try later": QueuePausedError,
        "ERR The specified DELAY is greater than TTL. Job refused since would never be delivered": (
            DelayExceedsTTLError
        ),
    },
    "WORKING": {
        "NOJOB Job not known in the context of this node.": UnknownJobError,
        "TOOLATE Half of job TTL already elapsed, you are no longer allowed to postpone "
        "the next delivery.": TooLateToPostponeError,
    },
}


def translates_errors(command_name: str) -> bool:
    """Whether the broker reports typed errors for this command."""

    return command_name in BROKER_ERROR_TRANSLATIONS


def translate_broker_error(command_name: str, error: BrokerError) -> DisqueError:
    """Map a broker error to its typed failure, or return it unchanged."""

    error_type = BROKER_ERROR_TRANSLATIONS.get(command_name, {}).get(error.reason)
    if error_type is None:
        return error
    return error_type(error.reason)


__all__ = ["BROKER_ERROR_TRANSLATIONS", "translate_broker_error", "translates_errors"]
