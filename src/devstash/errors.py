"""Error taxonomy and user-facing messages for DevStash."""

ERR_WEBHOOK_NOT_CONFIGURED = (
    "Webhook URL is not configured. "
    "Use 'devstash config set webhookUrl <url>' or the --webhook-url flag."
)
ERR_EMPTY_INPUT = "Input content is empty."
ERR_SNIPPET_IS_EMPTY = "Snippet is empty, aborting."
ERR_SAVING_SNIPPET = "Could not save snippet to DevStash."

MSG_SAVED = "Successfully saved to DevStash!"
MSG_PIPE_USAGE = "Usage: Pipe content into devstash. e.g., 'cat file.txt | devstash'"


class DevstashError(Exception):
    """Base class for every error the CLI reports to the user."""

    exit_code = 1


class UsageError(DevstashError):
    """Invalid arguments, such as an unknown config key."""

    exit_code = 2


class InputError(DevstashError):
    """Content could not be acquired."""


class InputReadError(InputError):
    """The input file could not be read."""


class EditorError(InputError):
    """The external editor could not be launched or exited with an error."""


class EmptyInputError(InputError):
    """Acquired content is empty after trimming whitespace."""

    def __init__(self, message: str = ERR_EMPTY_INPUT):
        super().__init__(message)


class ConfigurationError(DevstashError):
    """Settings required for delivery are missing or invalid."""


class WebhookNotConfiguredError(ConfigurationError):
    def __init__(self, message: str = ERR_WEBHOOK_NOT_CONFIGURED):
        super().__init__(message)


class TransportError(DevstashError):
    """The request never got a response (connection, DNS, timeout)."""


class DeliveryError(DevstashError):
    """The webhook answered with a status code >= 400."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        detail = f"Received status code {status_code} from webhook"
        if body:
            detail = f"{detail}: {body}"
        super().__init__(f"{ERR_SAVING_SNIPPET} {detail}")
