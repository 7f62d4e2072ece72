import os
import sys

from dotenv import load_dotenv

from enums.runtime_environment import RuntimeEnvironment

# Load .env but don't override existing environment variables
# This allows test scripts to set RUNTIME_ENVIRONMENT=TEST before import
load_dotenv(".env", override=False)

# Parse RUNTIME_ENVIRONMENT with clear error message on misconfiguration
try:
    _runtime_env_str = os.environ.get("RUNTIME_ENVIRONMENT")
    if not _runtime_env_str:
        raise ValueError("RUNTIME_ENVIRONMENT environment variable is not set")
    RUNTIME_ENVIRONMENT = RuntimeEnvironment(_runtime_env_str)
except ValueError as e:
    valid_values = [env.value for env in RuntimeEnvironment]
    print(f"\n ERROR: Invalid RUNTIME_ENVIRONMENT configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Valid values: {', '.join(valid_values)}", file=sys.stderr)
    print(f"Current value: {os.environ.get('RUNTIME_ENVIRONMENT', '(not set)')}", file=sys.stderr)
    print(f"\nAdd to .env: RUNTIME_ENVIRONMENT={valid_values[0]}\n", file=sys.stderr)
    sys.exit(1)

# Telegram bot used to notify staff about new orders and waiter calls
TOKEN = os.environ.get("TOKEN")

# Notification recipients: group chat ids ("-4993108536") or public usernames ("@staff")
# An order counts as submitted when at least one recipient receives it
try:
    _recipients_str = os.environ.get("NOTIFICATION_RECIPIENTS")
    if not _recipients_str or len(_recipients_str.strip()) == 0:
        raise ValueError("NOTIFICATION_RECIPIENTS environment variable is not set or empty")
    NOTIFICATION_RECIPIENTS = [recipient.strip() for recipient in _recipients_str.split(',') if recipient.strip()]
    if len(NOTIFICATION_RECIPIENTS) == 0:
        raise ValueError("NOTIFICATION_RECIPIENTS must contain at least one recipient")
except ValueError as e:
    print(f"\n ERROR: Invalid NOTIFICATION_RECIPIENTS configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Expected format: comma-separated list of Telegram chat IDs or @usernames", file=sys.stderr)
    print(f"Example: NOTIFICATION_RECIPIENTS=-4993108536,@kitchen_lead", file=sys.stderr)
    print(f"Current value: {os.environ.get('NOTIFICATION_RECIPIENTS', '(not set)')}\n", file=sys.stderr)
    sys.exit(1)

DB_NAME = os.environ.get("DB_NAME", "storefront.db")

STORE_NAME = os.environ.get("STORE_NAME", "Mazuhi Sushi")
BOT_LANGUAGE = os.environ.get("BOT_LANGUAGE", "es")  # es / en
CURRENCY_SYMBOL = os.environ.get("CURRENCY_SYMBOL", "$")
TIMEZONE = os.environ.get("TIMEZONE", "America/Mexico_City")  # Promotion windows and order timestamps

# Parse DELIVERY_SURCHARGE with error handling
try:
    DELIVERY_SURCHARGE = float(os.environ.get("DELIVERY_SURCHARGE", "30"))
    if DELIVERY_SURCHARGE < 0:
        raise ValueError(f"DELIVERY_SURCHARGE cannot be negative (got: {DELIVERY_SURCHARGE})")
except ValueError as e:
    print(f"\n ERROR: Invalid DELIVERY_SURCHARGE configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Expected: Non-negative number (e.g., 0, 30, 45.5)", file=sys.stderr)
    print(f"Current value: {os.environ.get('DELIVERY_SURCHARGE', '(not set)')}\n", file=sys.stderr)
    sys.exit(1)

# Estimated preparation times shown to customer and staff
PICKUP_ETA_MINUTES = int(os.environ.get("PICKUP_ETA_MINUTES", "30"))
DELIVERY_ETA_MINUTES = int(os.environ.get("DELIVERY_ETA_MINUTES", "45"))

ORDER_NUMBER_PREFIX = os.environ.get("ORDER_NUMBER_PREFIX", "MZ")

# Typing this as the customer name on the contact step calls a waiter instead of checking out
WAITER_CALL_KEYWORD = os.environ.get("WAITER_CALL_KEYWORD", "cc").strip().lower()

# Logging Configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"  # Mask tokens and customer data in logs

# Log Retention: Environment-specific defaults
# Dev: keep two weeks for debugging
# Prod: Use 5 days default to save disk space
if RUNTIME_ENVIRONMENT == RuntimeEnvironment.DEV:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "14"))
else:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "5"))
