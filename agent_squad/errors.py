"""Exception types raised across the agent squad backend."""


class AgentSquadError(Exception):
    """Base class for all agent squad errors."""


class ProviderUnavailable(AgentSquadError):
    """The LLM provider credential is not configured."""


class ProviderError(AgentSquadError):
    """The LLM provider call failed or returned an unusable payload."""


class StoreError(AgentSquadError):
    """A read or write against the conversation store failed."""


class ConversationNotFound(AgentSquadError):
    """No conversation exists for the given id."""

    def __init__(self, conversation_id: str):
        super().__init__(f"Conversation not found: {conversation_id}")
        self.conversation_id = conversation_id


class WorkflowNotFound(AgentSquadError):
    """No workflow exists for the given conversation."""

    def __init__(self, conversation_id: str):
        super().__init__(f"Workflow not found for conversation: {conversation_id}")
        self.conversation_id = conversation_id


class UnknownPersona(AgentSquadError, LookupError):
    """Persona id or position is not in the registry."""


class InvalidTurn(AgentSquadError, ValueError):
    """A submitted turn is missing required input."""


class TurnFailed(AgentSquadError):
    """A user turn could not be completed. The cause is chained."""
