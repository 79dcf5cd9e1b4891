"""Password policy enforced by the user stores."""

from typing import List, Mapping

from .errors import CredentialRejected


class PasswordPolicy:
    """Rules a new password must satisfy."""

    def __init__(
        self,
        min_length: int = 8,
        require_digit: bool = True,
        require_uppercase: bool = True,
        require_non_alphanumeric: bool = False,
    ):
        self.min_length = min_length
        self.require_digit = require_digit
        self.require_uppercase = require_uppercase
        self.require_non_alphanumeric = require_non_alphanumeric

    @classmethod
    def from_config(cls, config: Mapping) -> "PasswordPolicy":
        """Build a policy from the PASSWORD_* keys of a Flask config."""
        return cls(
            min_length=config.get("PASSWORD_MIN_LENGTH", 8),
            require_digit=config.get("PASSWORD_REQUIRE_DIGIT", True),
            require_uppercase=config.get("PASSWORD_REQUIRE_UPPERCASE", True),
            require_non_alphanumeric=config.get("PASSWORD_REQUIRE_NON_ALPHANUMERIC", False),
        )

    def validate(self, password: str) -> List[str]:
        """
        Check a password against the policy.

        Returns:
            A list of human-readable violations; empty if the password is acceptable.
        """
        if not password:
            return ["Password is required"]

        violations = []
        if len(password) < self.min_length:
            violations.append(f"Password must be at least {self.min_length} characters")
        if self.require_digit and not any(c.isdigit() for c in password):
            violations.append("Password must contain a digit")
        if self.require_uppercase and not any(c.isupper() for c in password):
            violations.append("Password must contain an uppercase letter")
        if self.require_non_alphanumeric and password.isalnum():
            violations.append("Password must contain a non-alphanumeric character")
        return violations

    def enforce(self, password: str) -> None:
        """Raise CredentialRejected if the password violates the policy."""
        violations = self.validate(password)
        if violations:
            raise CredentialRejected(violations)


def enforce_password(policy, password: str) -> None:
    """Apply an optional policy; without one only empty passwords are rejected."""
    if policy is not None:
        policy.enforce(password)
    elif not password:
        raise CredentialRejected(["Password is required"])
