"""Tests pour la table des récompenses."""

import pytest

from vindibot.engine.errors import UnknownCellCodeError
from vindibot.engine.rules import RewardTable


class TestRewardTable:
    """Couverture de RewardTable.build selon l'identité du héros."""

    def test_terrain_rewards(self):
        rewards = RewardTable.build(1)

        assert rewards["##"] == -1
        assert rewards["[]"] == 1
        assert rewards["  "] == 0
        assert rewards["$-"] == 100

    def test_own_mine_is_not_a_target(self):
        rewards = RewardTable.build(2)

        assert rewards["$2"] == -1
        assert rewards["$1"] == 100
        assert rewards["$3"] == 100
        assert rewards["$4"] == 100

    def test_every_other_hero_is_a_target(self):
        rewards = RewardTable.build(3)

        assert rewards["@1"] == 50
        assert rewards["@2"] == 50
        assert rewards["@4"] == 50
        assert "@3" not in rewards

    def test_own_hero_lookup_raises_unknown_code(self):
        rewards = RewardTable.build(3)

        with pytest.raises(UnknownCellCodeError) as excinfo:
            rewards["@3"]
        assert excinfo.value.code == "@3"

    def test_unknown_code_raises(self):
        with pytest.raises(UnknownCellCodeError, match="XX"):
            RewardTable.build(1)["XX"]

    def test_table_size_and_agent(self):
        rewards = RewardTable.build(4)

        assert rewards.agent_id == 4
        assert len(rewards) == 11
        assert set(rewards) >= {"##", "[]", "  ", "$-"}

    def test_build_is_pure(self):
        assert dict(RewardTable.build(2)) == dict(RewardTable.build(2))

    @pytest.mark.parametrize("agent_id", [0, 5, -1])
    def test_invalid_agent_id(self, agent_id):
        with pytest.raises(ValueError):
            RewardTable.build(agent_id)

    def test_describe_lists_every_entry(self):
        lines = RewardTable.build(1).describe().split("\n")

        assert "## : -1" in lines
        assert "$- : 100" in lines
        assert len(lines) == 11
