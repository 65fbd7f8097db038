"""Constants for the JSON-RPC remote plugin."""

PLUGIN_NAME = "jsonrpc-remote"

CONF_PATH = "path"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_HTTP_PORT = 8080

# Protocol tag carried by every response envelope
PROTOCOL_TAG = "2.0"

JSON_CONTENT_TYPE = "application/json"
JSON_CHARSET = "utf-8"

# Wire reasons, one per error class
REASON_INVALID_REQUEST = "invalid request"
REASON_ENVELOPE_INCOMPLETE = "method/id not found"
REASON_INVALID_METHOD = "invalid method"
REASON_INVALID_METHOD_CALL = "invalid method call"

# Playlist entry types the library storage understands
PLAYLIST_ENTRY_TYPES = ("file", "directory", "album")
