"""Session id -> Agent lookup owned by the lifecycle engine."""

from collections.abc import Iterator

from galaxy_library.models.agents import Agent

GREEK_SYMBOLS = (
    "α", "β", "γ", "δ", "ε", "ζ", "η", "θ", "ι", "κ", "λ", "μ",
    "ν", "ξ", "ο", "π", "ρ", "σ", "τ", "υ", "φ", "χ", "ψ", "ω",
)  # fmt: skip


class AgentRegistry:
    """Agents keyed by session id.

    ``session_id_order`` records every session ever registered, in order, and
    is never pruned; it numbers locally launched agents and picks each agent's
    label symbol.
    """

    def __init__(self) -> None:
        self._agents: dict[str, Agent] = {}
        self.session_id_order: list[str] = []

    def get(self, session_id: str) -> Agent | None:
        return self._agents.get(session_id)

    def next_symbol(self) -> str:
        return GREEK_SYMBOLS[len(self.session_id_order) % len(GREEK_SYMBOLS)]

    def register(self, agent: Agent) -> None:
        if agent.session_id in self._agents:
            raise ValueError(f"Agent already registered: {agent.session_id}")
        self._agents[agent.session_id] = agent
        self.session_id_order.append(agent.session_id)

    def remove(self, session_id: str) -> Agent | None:
        return self._agents.pop(session_id, None)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._agents

    def __iter__(self) -> Iterator[Agent]:
        return iter(list(self._agents.values()))

    def __len__(self) -> int:
        return len(self._agents)
