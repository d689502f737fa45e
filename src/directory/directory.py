"""Known teams and members that events can be scoped to and invite."""

from src.directory.dtos import MemberDTO, TeamDTO

TEAMS = (
    TeamDTO(id="team1", name="Development Team"),
    TeamDTO(id="team2", name="Marketing Team"),
    TeamDTO(id="team3", name="Sales Team"),
    TeamDTO(id="team4", name="HR Team"),
)

MEMBERS = (
    MemberDTO(id="user1", name="John Doe", email="john@example.com"),
    MemberDTO(id="user2", name="Jane Smith", email="jane@example.com"),
    MemberDTO(id="user3", name="Mike Johnson", email="mike@example.com"),
    MemberDTO(id="user4", name="Sarah Wilson", email="sarah@example.com"),
)


class MemberDirectory:
    def __init__(
        self,
        teams: tuple[TeamDTO, ...] = TEAMS,
        members: tuple[MemberDTO, ...] = MEMBERS,
    ) -> None:
        self._teams = teams
        self._members = {member.id: member for member in members}

    def list_teams(self) -> list[TeamDTO]:
        return list(self._teams)

    def list_members(self) -> list[MemberDTO]:
        return list(self._members.values())

    def has_member(self, member_id: str) -> bool:
        return member_id in self._members


member_directory = MemberDirectory()
