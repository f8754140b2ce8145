#!/usr/bin/env python3
"""Joue des parties locales dans l'arène headless et affiche un résumé.

Le même bot (et donc le même modèle appris) enchaîne les parties, sauf avec
``--reset-between`` qui vide le modèle entre deux parties.

Exemples:
    python run_local.py --episodes 5 --turns 200
    python run_local.py --policy random --seed 3
"""

from __future__ import annotations

import argparse
import logging
import sys

from vindibot.engine.board import format_board, format_hero
from vindibot.rl.policies import AgentPolicy, PolicyConfig, QLearningPolicy, RandomDirectionPolicy
from vindibot.sim.runner import HeadlessArena, run_episode


def _build_policy(args: argparse.Namespace) -> AgentPolicy:
    if args.policy == "random":
        return RandomDirectionPolicy(seed=args.seed)
    config = PolicyConfig(
        exploration=args.exploration,
        exploration_decay=args.exploration_decay,
        learning_steps=args.learning_steps,
    )
    return QLearningPolicy(config=config, seed=args.seed)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--policy", choices=("qlearning", "random"), default="qlearning")
    parser.add_argument("--episodes", type=int, default=3)
    parser.add_argument("--turns", type=int, default=300)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--exploration", type=float, default=0.5)
    parser.add_argument("--exploration-decay", type=float, default=1.0)
    parser.add_argument("--learning-steps", type=int, default=50)
    parser.add_argument("--reset-between", action="store_true")
    parser.add_argument("--show-board", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    policy = _build_policy(args)
    arena = HeadlessArena(max_turns=args.turns)

    print(f"Lancement de {args.episodes} parties ({policy.name})...")
    for index in range(1, args.episodes + 1):
        if args.reset_between and isinstance(policy, QLearningPolicy):
            policy.reset()

        summary = run_episode(policy, arena)
        line = (
            f"  Partie {index}: or={summary.gold} mines={summary.mine_count} "
            f"vie={summary.life} ({summary.duration_seconds * 1000:.1f}ms)"
        )
        if isinstance(policy, QLearningPolicy):
            line += f" états={policy.learner.num_states}"
        print(line)

        if args.show_board:
            print(format_board(arena.grid))
            print(format_hero(arena.hero()))

    return 0


if __name__ == "__main__":
    sys.exit(main())
