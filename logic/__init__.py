"""logic — Game rules package.

Top-level modules
-----------------
agent_generator — random AgentProfile per playthrough
infection       — per-visit risk model and infection roll
decision_flow   — per-location prompt state machine
locations       — location / decision table loader
advisories      — day-end messages and research tips
input_manager   — raw pygame input → intent mapping
"""
