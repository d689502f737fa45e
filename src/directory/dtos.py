from dataclasses import dataclass


@dataclass(frozen=True)
class TeamDTO:
    id: str
    name: str


@dataclass(frozen=True)
class MemberDTO:
    id: str
    name: str
    email: str
