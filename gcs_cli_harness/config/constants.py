# Constants
GSUTIL_BINARY = "gsutil"
GCLOUD_BINARY = "gcloud"

DEFAULT_COMMAND_TIMEOUT_SECONDS: float = 60.0
DEFAULT_SIGN_DURATION = "10m"

CREDENTIALS_ENV_VAR = "GOOGLE_APPLICATION_CREDENTIALS"
ENV_FILE_ENV_VAR = "GCS_HARNESS_ENV_FILE"
DEFAULT_ENV_FILE = ".env"

# Output markers emitted by `gsutil rm` when nothing matched the target
RM_NOT_FOUND_MARKERS = ("No URLs matched", "does not exist")

SIGNED_URL_PREFIX = "https://storage.googleapis.com/"
SIGNED_URL_LABEL = "signed_url:"

GCS_ENDPOINT = "storage.googleapis.com"
