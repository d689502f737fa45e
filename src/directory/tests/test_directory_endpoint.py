import pytest

from src.directory.directory import MemberDirectory
from src.directory.dtos import MemberDTO, TeamDTO
from src.directory.router import MEMBERS_URL, TEAMS_URL, get_member_directory


@pytest.mark.asyncio
async def test_list_teams(client):
    response = await client.get(TEAMS_URL)

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 4
    assert data[0] == {"id": "team1", "name": "Development Team"}


@pytest.mark.asyncio
async def test_list_members(client):
    response = await client.get(MEMBERS_URL)

    assert response.status_code == 200
    data = response.json()
    assert [member["id"] for member in data] == ["user1", "user2", "user3", "user4"]
    assert data[1]["email"] == "jane@example.com"


@pytest.mark.asyncio
async def test_list_members_from_custom_directory(client_factory):
    directory = MemberDirectory(
        teams=(TeamDTO(id="ops", name="Ops"),),
        members=(MemberDTO(id="m1", name="Max", email="max@example.com"),),
    )

    async with client_factory({get_member_directory: lambda: directory}) as client:
        teams = await client.get(TEAMS_URL)
        members = await client.get(MEMBERS_URL)

    assert teams.json() == [{"id": "ops", "name": "Ops"}]
    assert members.json() == [{"id": "m1", "name": "Max", "email": "max@example.com"}]


def test_has_member():
    directory = MemberDirectory()

    assert directory.has_member("user3")
    assert not directory.has_member("user9")
