"""Member registration — command and handler."""

import structlog
from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.errors import ConflictError
from marketplace.member.member import Member
from marketplace.shared.json_fields import load_list

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Member")
class RegisterMember:
    """Create a member record. Credentials live with the external auth service."""

    name = String(required=True, max_length=50)
    email = String(required=True, max_length=254)
    skills = Text()  # JSON array of strings
    location = String(max_length=255)
    bio = String(max_length=500)


@marketplace.command_handler(part_of=Member)
class RegisterMemberHandler:
    @handle(RegisterMember)
    def register_member(self, command):
        repo = current_domain.repository_for(Member)
        email = command.email.strip().lower()

        # Stored addresses are lower-cased by EmailAddress
        existing = repo._dao.query.filter(email_address=email).all()
        if existing.total:
            raise ConflictError({"email": ["A member with this email is already registered"]})

        member = Member.register(
            name=command.name,
            email=email,
            skills=load_list(command.skills),
            location=command.location,
            bio=command.bio,
        )
        repo.add(member)

        logger.info("Member registered", member_id=str(member.id), skill_count=len(member.skill_list))
        return str(member.id)
