# agri_advisor/core/exceptions.py
"""
Custom exceptions for the backend
"""

class AgriAdvisorError(Exception):
    """Base exception for the advisory backend"""
    pass

class AgentError(AgriAdvisorError):
    """Agent-related errors"""
    pass

class AgentConfigError(AgriAdvisorError):
    """Agent configuration errors"""
    pass

class ExternalAPIError(AgriAdvisorError):
    """External API errors"""
    pass

class AdvisoryError(AgriAdvisorError):
    """Advisory could not be produced from the completion endpoint"""
    pass

class LLMTransportError(AdvisoryError, ExternalAPIError):
    """Network failure or non-success status from the completion endpoint"""
    pass

class MalformedResponseError(AdvisoryError):
    """Model reply had no usable JSON object or did not fit the advisory schema"""
    pass

class AdvisoryCancelledError(AdvisoryError):
    """Request was cancelled or ran past its deadline"""
    pass
