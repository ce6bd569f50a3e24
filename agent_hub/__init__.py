"""Content workflows and tool-using assistant agents on LangChain / LangGraph."""

__version__ = "0.1.0"
