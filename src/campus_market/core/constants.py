"""Constants shared by the server and the API client."""

# Notification type tags; the type decides how `related_id` is read.
NOTIFICATION_MESSAGE_RECEIVED = "message_received"
NOTIFICATION_REQUEST_RECEIVED = "request_received"

# Message body prefix used when a service request is mirrored into the chat.
REQUEST_MESSAGE_PREFIX = "Request: "
