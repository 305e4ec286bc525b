"""Core runtime: agents, actions, results and the orchestration loop."""
