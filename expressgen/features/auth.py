"""Authentication and authorization features.

The four modules are independent.  Role middleware and CASL abilities both
read ``req.user`` but do not assume the token module is present; the
generated code marks that seam with an ``expressgen:`` comment.
"""

from __future__ import annotations

from ..manifest import ManifestPatch
from ..options import OptionRecord
from .base import FeatureModule, FeatureOutput


class AuthTokenFeature(FeatureModule):
    name = "auth-token"
    description = "JWT sign/verify helpers and bcrypt password hashing"

    def enabled(self, options: OptionRecord) -> bool:
        return options.auth_token

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        ctx = self.context(options, project_name)
        dev: dict[str, str] = {}
        if options.typed:
            dev = {"@types/jsonwebtoken": "^9.0.0", "@types/bcryptjs": "^2.4.0"}
        patch = ManifestPatch(
            dependencies={"jsonwebtoken": "^9.0.0", "bcryptjs": "^2.4.3"},
            dev_dependencies=dev,
        )
        return FeatureOutput([self.artifact("jwt", "src/auth/jwt.{ext}", options, ctx)], patch)


class AuthorizationFeature(FeatureModule):
    name = "authorization"
    description = "CASL capability definitions"

    def enabled(self, options: OptionRecord) -> bool:
        return options.authorization

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        ctx = self.context(options, project_name)
        patch = ManifestPatch(dependencies={"@casl/ability": "^6.4.0"})
        return FeatureOutput([self.artifact("casl", "src/auth/casl.{ext}", options, ctx)], patch)


class RolesFeature(FeatureModule):
    name = "roles"
    description = "Role-checking middleware"

    def enabled(self, options: OptionRecord) -> bool:
        return options.roles

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        ctx = self.context(options, project_name)
        return FeatureOutput([self.artifact("roles", "src/middleware/roles.{ext}", options, ctx)], ManifestPatch())


class ExampleResourceFeature(FeatureModule):
    name = "example-resource"
    description = "Example user routes"

    def enabled(self, options: OptionRecord) -> bool:
        return options.example_resource

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        ctx = self.context(options, project_name)
        return FeatureOutput([self.artifact("user.route", "src/routes/user.{ext}", options, ctx)], ManifestPatch())
