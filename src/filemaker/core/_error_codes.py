# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_404 = "http_404"
HTTP_415 = "http_415"
HTTP_500 = "http_500"
HTTP_502 = "http_502"
HTTP_503 = "http_503"
HTTP_504 = "http_504"

TRANSIENT_STATUS_CODES = {502, 503, 504}


def _http_subcode(status: int) -> str:
    return f"http_{status}"


# FileMaker service error codes (messages[0].code)
FM_OK = "0"
FM_FILE_MISSING = "100"
FM_RECORD_MISSING = "101"
FM_FIELD_MISSING = "102"
FM_TABLE_MISSING = "104"
FM_LAYOUT_MISSING = "105"
FM_TABLE_MISSING_ALT = "106"
FM_INVALID_ACCOUNT = "212"
FM_NO_RECORDS_MATCH = "401"
FM_UNABLE_TO_OPEN_FILE = "802"
FM_INVALID_TOKEN = "952"
FM_INVALID_PARAMETER = "960"
FM_INVALID_URL = "1630"

NOT_FOUND_CODES = {
    FM_FILE_MISSING,
    FM_RECORD_MISSING,
    FM_TABLE_MISSING,
    FM_LAYOUT_MISSING,
    FM_TABLE_MISSING_ALT,
    FM_UNABLE_TO_OPEN_FILE,
}

# 500-511 are field validation failures, 1700-1713 are Data API parameter errors
VALIDATION_CODES = (
    {FM_FIELD_MISSING, FM_INVALID_PARAMETER, FM_INVALID_URL}
    | {str(c) for c in range(500, 512)}
    | {str(c) for c in range(1700, 1714)}
)

# Validation subcodes (client side)
VALIDATION_EMPTY_QUERY = "validation_empty_query"
VALIDATION_RECORD_ID = "validation_record_id"
VALIDATION_PAGINATION = "validation_pagination"
VALIDATION_FIELD_DATA = "validation_field_data"
VALIDATION_NO_LAYOUT = "validation_no_layout"

# Decode subcodes
DECODE_NOT_JSON = "decode_not_json"
DECODE_MISSING_RESPONSE = "decode_missing_response"
DECODE_UNEXPECTED_SHAPE = "decode_unexpected_shape"

# Authentication subcodes
AUTH_INVALID_TOKEN = "auth_invalid_token"
AUTH_INVALID_ACCOUNT = "auth_invalid_account"
AUTH_TOKEN_MISSING = "auth_token_missing"
