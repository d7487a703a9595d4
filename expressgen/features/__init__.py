"""Feature module catalog.

``FEATURE_SEQUENCE`` fixes the order in which enabled features are applied so
logs and reports are reproducible.  No feature depends on that order.
"""

from __future__ import annotations

from ..errors import UnknownFeatureError
from ..templates import TemplateRenderer
from .api_docs import ApiDocsFeature
from .auth import AuthorizationFeature, AuthTokenFeature, ExampleResourceFeature, RolesFeature
from .base import FeatureModule, FeatureOutput, apply_feature, run_command
from .demo import DemoFeature
from .docker import DockerFeature
from .health import HealthFeature
from .messaging import MessagingFeature
from .microservices import MicroservicesFeature
from .monitoring import MonitoringFeature
from .persistence import PersistenceFeature
from .project import CoreFeature, EnvFileFeature, GitignoreFeature, LintFeature, TypeScriptFeature
from .rate_limit import RateLimitFeature
from .realtime import RealtimeFeature
from .testing import TestingFeature

FEATURE_SEQUENCE: tuple[type[FeatureModule], ...] = (
    CoreFeature,
    EnvFileFeature,
    PersistenceFeature,
    AuthTokenFeature,
    AuthorizationFeature,
    RolesFeature,
    ExampleResourceFeature,
    TypeScriptFeature,
    TestingFeature,
    LintFeature,
    GitignoreFeature,
    DemoFeature,
    DockerFeature,
    HealthFeature,
    ApiDocsFeature,
    RateLimitFeature,
    MessagingFeature,
    MonitoringFeature,
    RealtimeFeature,
    MicroservicesFeature,
)


def feature_names() -> list[str]:
    """CLI names of every feature, in declared order."""
    return [cls.name for cls in FEATURE_SEQUENCE]


def build_features(renderer: TemplateRenderer | None = None) -> list[FeatureModule]:
    """Instantiate every feature module around one shared renderer."""
    renderer = renderer or TemplateRenderer()
    return [cls(renderer) for cls in FEATURE_SEQUENCE]


def select_features(
    names: list[str], renderer: TemplateRenderer | None = None
) -> list[FeatureModule]:
    """Return the modules named in *names*, in declared order.

    Raises:
        UnknownFeatureError: A name is not in the catalog.
    """
    known = feature_names()
    wanted = {name.strip() for name in names if name.strip()}
    for name in sorted(wanted):
        if name not in known:
            raise UnknownFeatureError(name, known)
    return [f for f in build_features(renderer) if f.name in wanted]


__all__ = [
    "FEATURE_SEQUENCE",
    "FeatureModule",
    "FeatureOutput",
    "apply_feature",
    "build_features",
    "feature_names",
    "run_command",
    "select_features",
]
