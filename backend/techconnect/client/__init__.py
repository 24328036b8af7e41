"""Python client for the portal: session context, HTTP calls, view sync."""

from techconnect.client.api import (
	ApiError,
	ClientError,
	Forbidden,
	NetworkError,
	NotFound,
	PortalClient,
	Unauthenticated,
	ValidationFailed,
)
from techconnect.client.session import SessionContext, SessionStore
from techconnect.client.sync import (
	AnnouncementView,
	Destination,
	OperationInFlight,
	ReadOnlyView,
	Redirect,
	ViewState,
)

__all__ = [
	"AnnouncementView",
	"ApiError",
	"ClientError",
	"Destination",
	"Forbidden",
	"NetworkError",
	"NotFound",
	"OperationInFlight",
	"PortalClient",
	"ReadOnlyView",
	"Redirect",
	"SessionContext",
	"SessionStore",
	"Unauthenticated",
	"ValidationFailed",
	"ViewState",
]
