"""EmailAddress value object for member contact addresses."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from marketplace.domain import marketplace

_EMAIL_PATTERN = re.compile(r"^[\w+-]+(\.[\w+-]+)*@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}$")


@marketplace.value_object
class EmailAddress:
    """A structurally valid email address, stored lower-cased.

    One ``@``, no whitespace, no empty or dot-bounded labels, and a domain
    with an alphabetic top-level label of at least two characters.
    """

    address = String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address
        if email is None:
            return

        if not _EMAIL_PATTERN.match(email):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        _, domain_part = email.split("@", 1)
        if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})
