# Local application imports
from recognition.settings.common import CommonSettings


class DevSettings(CommonSettings):
    DEBUG_MODE: bool = True
