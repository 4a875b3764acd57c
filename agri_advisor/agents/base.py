# agri_advisor/agents/base.py
"""
Base agent class for all AI agents in the system
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, TypeVar, Generic, List
from pydantic import BaseModel
import logging
from datetime import datetime

from agri_advisor.core.config import Settings, get_settings
from agri_advisor.core.exceptions import AgentError

# Type variables for generic typing
RequestType = TypeVar('RequestType', bound=BaseModel)
ResponseType = TypeVar('ResponseType', bound=BaseModel)

class BaseAgent(ABC, Generic[RequestType, ResponseType]):
    """
    Base class for all AI agents

    Provides common functionality like:
    - Configuration management
    - Error handling with fallback responses
    - Logging
    - Health reporting
    """

    def __init__(self, agent_name: str, settings: Optional[Settings] = None):
        self.agent_name = agent_name
        self.settings = settings or get_settings()
        self.logger = logging.getLogger(f"agents.{agent_name}")

        # Validate configuration
        self._validate_config()

        self.logger.info(f"Initialized {agent_name} agent")

    @property
    def fallback_enabled(self) -> bool:
        return self.settings.fallback_enabled

    @abstractmethod
    def _validate_config(self) -> None:
        """Validate agent-specific configuration"""
        pass

    @abstractmethod
    async def process_request(self, request: RequestType) -> ResponseType:
        """Process agent request - must be implemented by subclasses"""
        pass

    @abstractmethod
    def get_fallback_response(self, request: RequestType, error: Exception) -> ResponseType:
        """Get fallback response when agent fails"""
        pass

    async def execute(self, request: RequestType) -> ResponseType:
        """
        Main execution method with error handling
        """
        start_time = datetime.now()

        try:
            self.logger.info(f"Processing {self.agent_name} request")
            response = await self.process_request(request)

            execution_time = (datetime.now() - start_time).total_seconds()
            self.logger.info(f"Request processed in {execution_time:.2f}s")

            return response

        except Exception as e:
            self.logger.error(f"Error processing request: {e}", exc_info=True)

            if not self.fallback_enabled:
                raise AgentError(f"{self.agent_name} agent failed: {e}") from e

            try:
                fallback_response = self.get_fallback_response(request, e)
                self.logger.info("Returned fallback response")
                return fallback_response
            except Exception as fallback_error:
                self.logger.error(f"Fallback also failed: {fallback_error}")
                raise AgentError(f"{self.agent_name} agent failed: {e}") from e

    async def health_check(self) -> Dict[str, Any]:
        """Agent health check"""
        try:
            self._validate_config()

            return {
                "agent": self.agent_name,
                "status": "healthy",
                "timestamp": datetime.now().isoformat(),
                "config_valid": True,
                "fallback_enabled": self.fallback_enabled
            }
        except Exception as e:
            return {
                "agent": self.agent_name,
                "status": "unhealthy",
                "timestamp": datetime.now().isoformat(),
                "error": str(e),
                "config_valid": False
            }

class AgentRegistry:
    """Registry for managing multiple agents"""

    def __init__(self):
        self._agents: Dict[str, BaseAgent] = {}
        self.logger = logging.getLogger("agents.registry")

    def register(self, agent: BaseAgent) -> None:
        """Register an agent"""
        self._agents[agent.agent_name] = agent
        self.logger.info(f"Registered agent: {agent.agent_name}")

    def unregister(self, agent_name: str) -> None:
        self._agents.pop(agent_name, None)

    def get(self, agent_name: str) -> Optional[BaseAgent]:
        """Get agent by name"""
        return self._agents.get(agent_name)

    def list_agents(self) -> List[str]:
        """List all registered agent names"""
        return list(self._agents.keys())

    async def health_check_all(self) -> Dict[str, Any]:
        """Health check all agents"""
        results = {}
        for name, agent in self._agents.items():
            results[name] = await agent.health_check()
        return results

# Global agent registry
agent_registry = AgentRegistry()
