from multibuild.application.multibuild import MultiBuild
from multibuild.application.options import MultiBuildOptions

__all__ = [
    "MultiBuild",
    "MultiBuildOptions",
]
