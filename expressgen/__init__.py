"""expressgen -- Express.js project generator.

Expands a typed option set into a generated project tree and a merged
``package.json``, and adds schematics or feature modules to existing
projects.

Quick usage::

    import asyncio
    from expressgen import GeneratorConfig, OptionRecord, ScaffoldOrchestrator

    options = OptionRecord(dialect="typed", database="postgres", auth_token=True)
    asyncio.run(ScaffoldOrchestrator(GeneratorConfig(), options).run("my-api"))
"""

__version__ = "0.1.0"

from .config import GeneratorConfig
from .errors import ExpressgenError
from .features import FEATURE_SEQUENCE, FeatureModule, apply_feature
from .manifest import ManifestPatch
from .options import Database, Dialect, OptionRecord, Orm
from .orchestrator import ScaffoldOrchestrator, ScaffoldReport, ScaffoldStage, add_features
from .schematics import SchematicGenerator, SchematicKind
from .templates import TemplateRenderer
from .writer import Artifact, ArtifactWriter, WritePolicy

__all__ = [
    "Artifact",
    "ArtifactWriter",
    "Database",
    "Dialect",
    "ExpressgenError",
    "FEATURE_SEQUENCE",
    "FeatureModule",
    "GeneratorConfig",
    "ManifestPatch",
    "OptionRecord",
    "Orm",
    "ScaffoldOrchestrator",
    "ScaffoldReport",
    "ScaffoldStage",
    "SchematicGenerator",
    "SchematicKind",
    "TemplateRenderer",
    "WritePolicy",
    "__version__",
    "add_features",
    "apply_feature",
]
