class AppStatusCode:
    # Success
    DATA_RETRIEVED_SUCCESSFULLY = "200"
    CREATED_SUCCESSFULLY = "201"
    UPDATED_SUCCESSFULLY = "202"
    DELETED_SUCCESSFULLY = "203"

    # Generic failures
    OPERATION_FAILED = "1000"
    INVALID_INPUT = "1001"
    REQUIRED_VALIDATION_ERROR = "1002"
    RESOURCE_NOT_FOUND = "1003"
    DUPLICATE_RECORD = "1004"
    INSUFFICIENT_STOCK = "1005"

    # Authentication / authorization
    AUTHENTICATION_TOKEN_MISSING = "2000"
    AUTHENTICATION_TOKEN_INVALID = "2001"
    AUTHENTICATION_TOKEN_EXPIRED = "2002"
    AUTHENTICATION_USER_INVALID = "2003"
    AUTHENTICATION_USER_NOT_VERIFIED = "2004"
    AUTHENTICATION_UNAUTHORIZED_ACCESS = "2005"

    # Users
    USER_EMAIL_IS_UNIQUE = "3000"
