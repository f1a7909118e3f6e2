from typing import Any

from litarchive.domain.entities import Actor
from litarchive.domain.errors import Unauthenticated, Unauthorized
from litarchive.rules.models import Rules


class PolicyEngine:
    def __init__(self, rules: Rules):
        self.rules = rules

    def check_permission(
        self,
        actor: Actor | None,
        action: str,
        resource: Any = None,
    ) -> bool:
        """
        Check if the actor is allowed to perform the action on the resource.

        Order of precedence:
        1. Public Permissions (Global)
        2. Role-Based Access Control (RBAC)
        3. Attribute-Based Access Control (ABAC)
        """
        # 1. Public Permissions
        if action in self.rules.rbac.public_permissions:
            return True

        if actor is None:
            return False

        # 2. RBAC
        allowed_actions = self.rules.rbac.roles.get(actor.role.upper(), [])
        if "*" in allowed_actions or action in allowed_actions:
            return True
        # Scoped wildcards ("content:*" matches "content:edit")
        if ":" in action:
            scope = action.split(":")[0]
            if f"{scope}:*" in allowed_actions:
                return True

        # 3. ABAC
        if resource is not None:
            for rule in self.rules.abac.content_rules:
                if action in rule.allow and self._evaluate_rule(
                    rule.if_condition, actor, resource
                ):
                    return True

        return False

    def _evaluate_rule(self, condition: dict[str, Any], actor: Actor, resource: Any) -> bool:
        """
        Evaluate condition predicates from rules.yaml.
        Supported predicates:
        - role_in: list[str]
        - owns_content: bool
        """
        for predicate, args in condition.items():
            if predicate == "role_in":
                if actor.role.upper() not in {r.upper() for r in args}:
                    return False
            elif predicate == "owns_content":
                if args:
                    author_id = getattr(resource, "author_id", None)
                    if author_id is None or str(author_id) != str(actor.user_id):
                        return False
            else:
                # Unknown predicates never grant access
                return False
        return True

    def require(self, actor: Actor | None, action: str, resource: Any = None) -> None:
        """
        Raise unless the actor may perform the action.

        Missing identity is Unauthenticated; a known actor without the
        permission is Unauthorized.
        """
        if actor is None and action not in self.rules.rbac.public_permissions:
            raise Unauthenticated("Sign in to continue")
        if not self.check_permission(actor, action, resource):
            raise Unauthorized(f"Not allowed: {action}")
