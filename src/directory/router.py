from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.directory.directory import MemberDirectory, member_directory

router = APIRouter()

TEAMS_URL = "/api/v1/teams"
MEMBERS_URL = "/api/v1/users"


class TeamResponse(BaseModel):
    id: str
    name: str


class MemberResponse(BaseModel):
    id: str
    name: str
    email: str


def get_member_directory() -> MemberDirectory:
    """Dependency to get the member directory."""
    return member_directory


@router.get(TEAMS_URL, response_model=list[TeamResponse])
async def list_teams(
    directory: MemberDirectory = Depends(get_member_directory),
) -> list[TeamResponse]:
    """Teams an event can be scoped to."""
    return [TeamResponse(id=team.id, name=team.name) for team in directory.list_teams()]


@router.get(MEMBERS_URL, response_model=list[MemberResponse])
async def list_members(
    directory: MemberDirectory = Depends(get_member_directory),
) -> list[MemberResponse]:
    """Members that can be invited as user guests."""
    return [
        MemberResponse(id=member.id, name=member.name, email=member.email)
        for member in directory.list_members()
    ]
