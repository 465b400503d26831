import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./orders.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", 0))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    AUTH_DISABLED = bool(data.get("AUTH_DISABLED", False))
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Order lifecycle
    STRICT_STATUS_TRANSITIONS = bool(data.get("STRICT_STATUS_TRANSITIONS", True))
    ORDER_NUMBER_PREFIX = data.get("ORDER_NUMBER_PREFIX", "SIP")
    DELIVERY_SLIP_NUMBER_PREFIX = data.get("DELIVERY_SLIP_NUMBER_PREFIX", "IRS")

    # Invoicing
    DEFAULT_TAX_RATE = data.get("DEFAULT_TAX_RATE", 20)  # Percent
    INVOICE_NUMBER_PREFIX = data.get("INVOICE_NUMBER_PREFIX", "INV")
    INVOICE_NUMBER_MAX_RETRIES = data.get("INVOICE_NUMBER_MAX_RETRIES", 5)

    # Payment ledger
    INVOICE_DUE_DAYS = data.get("INVOICE_DUE_DAYS", 30)
    RECORD_ACCOUNT_TRANSACTIONS = bool(data.get("RECORD_ACCOUNT_TRANSACTIONS", True))

    # Concurrency
    LOCK_TIMEOUT_SECONDS = data.get("LOCK_TIMEOUT_SECONDS", 10)
    REQUEST_TIMEOUT_SECONDS = data.get("REQUEST_TIMEOUT_SECONDS", 30)

    # Delivery confirmation
    DELIVERY_NOTIFICATION_WEBHOOK = data.get("DELIVERY_NOTIFICATION_WEBHOOK", None)
    NOTIFICATION_TIMEOUT_SECONDS = data.get("NOTIFICATION_TIMEOUT_SECONDS", 10.0)
