"""Module RL pour vindibot.

Ce module contient les composants de l'apprentissage par renforcement
tabulaire :

- features.py : encodage du voisinage du héros en clé d'état
- environment.py : plateau courant, positions visées et récompenses
- qlearning.py : graphe de transitions et moteur Q-learning
- policies.py : politiques (aléatoire, boucle d'agent Q-learning)

L'état est **local** : seules les quatre cases voisines du héros comptent, ce
qui permet de réutiliser ce qui a été appris d'une zone du plateau à l'autre.

Exemple :
    >>> from vindibot.rl import QLearner
    >>>
    >>> learner = QLearner(seed=7)
    >>> _ = learner.add("S1", "S2", 10, "n")
    >>> _ = learner.set_state("S1")
    >>> learner.step()
    'S2'
    >>> learner.best_action("S1")
    'n'
"""

from .environment import Environment
from .features import decode_state, encode_state, surroundings
from .policies import (
    AgentPolicy,
    PolicyConfig,
    QLearningPolicy,
    RandomDirectionPolicy,
    TurnDecision,
)
from .qlearning import ActionEdge, QLearner, StateNode

__all__ = [
    "ActionEdge",
    "AgentPolicy",
    "Environment",
    "PolicyConfig",
    "QLearner",
    "QLearningPolicy",
    "RandomDirectionPolicy",
    "StateNode",
    "TurnDecision",
    "decode_state",
    "encode_state",
    "surroundings",
]
