"""Error taxonomy shared by adapters and the reconciliation core.

Every message is meant to be read by an operator through a plain string channel,
so each error renders the status code, resource name or raw body it carries.
Transport failures are not wrapped: ``httpx.HTTPError`` propagates unchanged.
"""

from __future__ import annotations


class FlydockError(RuntimeError):
    """Base class for failures raised by flydock itself."""


class IllegalSlugError(FlydockError, ValueError):
    """Raised when a caller-supplied identifier is unsafe to put in a URL."""

    def __init__(self, kind: str, value: str) -> None:
        super().__init__(f"illegal slug for {kind}: {value!r}")
        self.kind = kind
        self.value = value


class RemoteAPIError(FlydockError):
    """Raised for any non-success status the protocols do not recover from."""

    def __init__(self, status: int, body: str, *, context: str | None = None) -> None:
        prefix = f"{context} " if context else ""
        super().__init__(f"{prefix}failed with status {status}: {body}")
        self.status = status
        self.body = body


class ResponseDecodeError(FlydockError):
    """Raised when a response body does not match the expected shape."""

    def __init__(self, message: str, *, body: str) -> None:
        super().__init__(f"{message}: `{body}`")
        self.body = body


class UnexpectedResponseError(FlydockError):
    """Raised when a well-formed response contradicts the request that produced it."""


class ConflictUnresolvableError(FlydockError):
    """Raised when a conflict response cannot be turned into an existing resource."""


class OwnershipMismatchError(FlydockError):
    """Raised when a resource exists but belongs to a different organization."""

    def __init__(self, app_name: str, *, actual_org: str, requested_org: str) -> None:
        super().__init__(
            f"app '{app_name}' already exists but belongs to organization "
            f"'{actual_org}', not the requested '{requested_org}'."
        )
        self.app_name = app_name
        self.actual_org = actual_org
        self.requested_org = requested_org


class DockerCommandError(FlydockError):
    """Raised when the docker CLI exits with a non-zero status."""

    def __init__(self, exit_code: int | None, *, stderr: str, stdout: str) -> None:
        super().__init__(
            f"Docker command failed (Exit {exit_code}).\n"
            f"Stderr: {stderr.strip()}\nStdout: {stdout.strip()}"
        )
        self.exit_code = exit_code
        self.stderr = stderr
        self.stdout = stdout


class ActivityError(FlydockError):
    """Terminal failure of one activity invocation, rendered as a plain message."""
