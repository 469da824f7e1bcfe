# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Constants for FileMaker Data API payloads and telemetry attributes.
"""

# Response header carrying the session token (mirrors response.token on login)
TOKEN_HEADER = "X-FM-Data-Access-Token"

# Sort order literals accepted by the Data API
SORT_ASCEND = "ascend"
SORT_DESCEND = "descend"

# Global fields are shared across records and excluded from field-name discovery
GLOBAL_FIELD_PREFIX = "g_"

# Length of the response body kept on errors
BODY_EXCERPT_LENGTH = 200

# OpenTelemetry semantic attribute names
OTEL_ATTR_DB_SYSTEM = "db.system"
OTEL_ATTR_DB_OPERATION = "db.operation"
OTEL_ATTR_DB_NAME = "db.name"
OTEL_ATTR_HTTP_METHOD = "http.request.method"
OTEL_ATTR_HTTP_URL = "url.full"
OTEL_ATTR_HTTP_STATUS_CODE = "http.response.status_code"
OTEL_ATTR_FILEMAKER_LAYOUT = "filemaker.layout"
OTEL_ATTR_FILEMAKER_REQUEST_ID = "filemaker.request_id"
OTEL_ATTR_FILEMAKER_CORRELATION_ID = "filemaker.correlation_id"
OTEL_ATTR_FILEMAKER_ERROR_CODE = "filemaker.error_code"
