"""Agent factory for filling the AI seats."""

import random
from typing import Dict, List, Optional

from holdem_engine.agents.base import BaseAgent
from holdem_engine.agents.naive import NaiveAgent
from holdem_engine.models.table import TableConfig

# Default agent names
AGENT_NAMES = [
    "Wild Bill", "Calling Station", "Solid Sam", "Lucky Lou",
    "Nit Nancy", "Mad Marty", "Easy Mark", "Safe Sally",
]


class AgentFactory:
    """Factory for creating AI agents."""

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize the agent factory.

        Args:
            rng: Random source shared by every agent created here.
        """
        self.rng = rng or random.Random()
        self._used_names: List[str] = []

    def create_agent(self, seat: int, name: Optional[str] = None) -> BaseAgent:
        """Create an agent for a seat, generating a name if none is given."""
        if name is None:
            name = self._generate_name()
        else:
            self._used_names.append(name)
        return NaiveAgent(name=name, seat=seat, rng=self.rng)

    def create_agents_for_table(self, config: TableConfig) -> Dict[int, BaseAgent]:
        """Create agents for seats 1..player_count-1; seat 0 is the human.

        Returns:
            Dictionary mapping seat numbers to agents.
        """
        self._used_names = []
        agents: Dict[int, BaseAgent] = {}
        for seat in range(1, config.player_count):
            index = seat - 1
            name = config.ai_names[index] if index < len(config.ai_names) else None
            agents[seat] = self.create_agent(seat, name)
        return agents

    def _generate_name(self) -> str:
        """Generate a unique name."""
        available_names = [n for n in AGENT_NAMES if n not in self._used_names]
        if not available_names:
            name = f"Bot {len(self._used_names) + 1}"
        else:
            name = self.rng.choice(available_names)
        self._used_names.append(name)
        return name
