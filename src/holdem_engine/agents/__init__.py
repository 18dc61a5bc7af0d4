"""AI agents module."""

from holdem_engine.agents.base import AgentStats, BaseAgent
from holdem_engine.agents.decision import Decision, DecisionContext, DecisionType
from holdem_engine.agents.naive import NaiveAgent
from holdem_engine.agents.factory import AgentFactory

__all__ = ["AgentStats", "BaseAgent", "Decision", "DecisionContext", "DecisionType",
           "NaiveAgent", "AgentFactory"]
