from mobile.screens.home import HomePageScreen, ScreenState
from mobile.screens.profile import ProfileScreen

__all__ = ["HomePageScreen", "ProfileScreen", "ScreenState"]
