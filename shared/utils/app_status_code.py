class AppStatusCode:
    # Success
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    CREATED_SUCCESSFULLY = "101"
    UPDATED_SUCCESSFULLY = "102"
    DELETED_SUCCESSFULLY = "103"
    BULK_OPERATION_COMPLETED = "104"
    BULK_OPERATION_PARTIAL = "105"

    # Authentication / authorization
    AUTHENTICATION_TOKEN_INVALID = "200"
    AUTHENTICATION_TOKEN_EXPIRED = "201"
    AUTHENTICATION_SESSION_TIMEOUT = "202"
    AUTHENTICATION_USER_INVALID = "203"
    AUTHENTICATION_USER_INACTIVE = "204"
    AUTHENTICATION_CREDENTIALS_INVALID = "205"
    AUTHENTICATION_REQUIRED = "206"
    ACCESS_FORBIDDEN = "207"

    # Request / domain
    INVALID_INPUT = "300"
    VALIDATION_ERROR = "301"
    DUPLICATE_ADD_ERROR = "302"
    NOT_FOUND = "303"
    INVALID_STATE = "304"

    # Server
    OPERATION_FAILED = "500"
    DATABASE_ERROR = "502"
