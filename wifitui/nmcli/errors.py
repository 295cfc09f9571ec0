NETWORK_NOT_FOUND = "Network not found. It may be out of range or hidden."
PASSWORD_REQUIRED = "Password required. This network needs a password to connect."
NO_ADAPTER = "No WiFi adapter found. Make sure your WiFi hardware is enabled."
SERVICE_NOT_RUNNING = (
    "NetworkManager is not running. Start it with: sudo systemctl start NetworkManager"
)
SAVED_NOT_FOUND = "Saved connection not found. It may have already been removed."
INCORRECT_PASSWORD = "Incorrect password. Please try again."
PERMISSION_DENIED = (
    "Permission denied. You may need to run with appropriate privileges."
)
UNKNOWN_ERROR = "An unknown error occurred."

# The password-needed check matches on these phrases in the friendly text,
# so they have to stay in sync with the two messages above.
PASSWORD_PHRASES = ("Password required", "Incorrect password")


def launch_failed(utility: str) -> str:
    return f"Couldn't run {utility}. Make sure it is installed and in your PATH."


def friendly_error(text: str) -> str:
    """
    Translate raw nmcli diagnostics into a beginner-friendly message.
    Text that matches nothing is returned verbatim.
    """
    text = text.strip()

    if "No network with SSID" in text:
        return NETWORK_NOT_FOUND
    elif "Secrets were required, but not provided" in text:
        return PASSWORD_REQUIRED
    elif "No suitable device found" in text:
        return NO_ADAPTER
    elif "is not running" in text:
        return SERVICE_NOT_RUNNING
    elif "Error: Connection" in text and "not found" in text:
        return SAVED_NOT_FOUND
    elif "Passwords or encryption keys are required" in text:
        return INCORRECT_PASSWORD
    elif "permission" in text or "not authorized" in text:
        return PERMISSION_DENIED
    elif not text:
        return UNKNOWN_ERROR

    return text


def needs_password(message: str) -> bool:
    return any(phrase in message for phrase in PASSWORD_PHRASES)
