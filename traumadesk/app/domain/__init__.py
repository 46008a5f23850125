from traumadesk.app.domain.modelos import Lesion, Paciente
from traumadesk.app.domain.lesiones import LesionCodeRegistry, build_lesion_registry
from traumadesk.app.domain.enums import *  # noqa: F401,F403
from traumadesk.app.domain.exceptions import *  # noqa: F401,F403

__all__ = [
    "Paciente",
    "Lesion",
    "LesionCodeRegistry",
    "build_lesion_registry",
]
