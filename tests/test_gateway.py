import asyncio
from types import SimpleNamespace

from rolebot.roles.gateway import DiscordMembershipGateway


def _member():
    edits = []

    async def edit(**kwargs):
        edits.append(kwargs)

    member = SimpleNamespace(
        id=5,
        roles=[SimpleNamespace(id=1), SimpleNamespace(id=30), SimpleNamespace(id=20)],
        edit=edit,
    )
    return member, edits


def test_get_member_roles_skips_everyone():
    async def run_test():
        member, _ = _member()
        guild = SimpleNamespace(id=1, name="guild", get_member=lambda uid: member)
        roles = await DiscordMembershipGateway().get_member_roles(guild, 5)
        assert roles == {20, 30}

    asyncio.run(run_test())


def test_fetches_uncached_member():
    async def run_test():
        member, edits = _member()
        fetched = []

        async def fetch_member(uid):
            fetched.append(uid)
            return member

        guild = SimpleNamespace(id=1, name="guild", get_member=lambda uid: None, fetch_member=fetch_member)
        await DiscordMembershipGateway(reason="test").set_member_roles(guild, 5, {30, 20})
        assert fetched == [5]
        assert [r.id for r in edits[0]["roles"]] == [20, 30]
        assert edits[0]["reason"] == "test"

    asyncio.run(run_test())
