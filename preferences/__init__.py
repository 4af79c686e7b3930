#Marks preferences as a package.
#Key-value persistence the screens use (last participants, map region, distance unit).
#The travel engine does not depend on it.

from .store import PreferenceStore

__all__ = ["PreferenceStore"]
