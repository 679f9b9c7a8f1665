class CfSwitchError(Exception):
    """
    Base class for all errors that are reported to the user at the command boundary. The *hint* is printed on a
    separate line after the error message, if set.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        return self.message


class ProfileNotFoundError(CfSwitchError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Profile '{name}' not found.")
        self.name = name


class ProfileExistsError(CfSwitchError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Profile '{name}' already exists.")
        self.name = name


class NoProfilesError(CfSwitchError):
    def __init__(self) -> None:
        super().__init__("No profiles configured.", hint="Add one with: cf-switch add <name> -e <email> -t <token>")


class NoActiveProfileError(CfSwitchError):
    def __init__(self) -> None:
        super().__init__("No profile currently active. Use 'cf-switch use <profile>' first.")


class DanglingCurrentError(CfSwitchError):
    """
    Raised when the configuration records an active profile that is no longer registered.
    """

    def __init__(self, name: str) -> None:
        super().__init__("Current profile no longer exists.")
        self.name = name


class NoZoneSpecifiedError(CfSwitchError):
    def __init__(self, profile_name: str, what: str, usage: str) -> None:
        super().__init__(f"No {what} specified and profile '{profile_name}' has no default zone.", hint=usage)
        self.profile_name = profile_name


class ConfigCorruptError(CfSwitchError):
    pass


class ConfigReadError(CfSwitchError):
    pass


class ConfigWriteError(CfSwitchError):
    pass


class EnvFileWriteError(CfSwitchError):
    pass
