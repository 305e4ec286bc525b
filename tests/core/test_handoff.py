"""
Tests for hand-off action factories
"""

from swarmpy import Action, Agent, HandoffCondition, Result, create_conditional_handoff, create_handoff


class TestCreateHandoff:
    def test_naming_and_schema(self):
        target = Agent(name="Sales Team", model="m")
        act = create_handoff(target)

        assert isinstance(act, Action)
        assert act.name == "transfer_to_sales_team"
        assert act.to_openai_function()["parameters"] == {"type": "object", "properties": {}, "required": []}

    def test_custom_name_and_description(self):
        act = create_handoff(Agent(name="X", model="m"), name="escalate", description="Escalate the case.")
        assert act.name == "escalate"
        assert act.description == "Escalate the case."

    def test_result_carries_merged_context(self):
        target = Agent(name="X", model="m")
        act = create_handoff(target, context_update={"priority": "high"})

        result = act.invoke({"user": "u1", "priority": "low"}, {})

        assert isinstance(result, Result)
        assert result.agent is target
        assert result.context_variables == {"user": "u1", "priority": "high"}

    def test_without_update_context_is_copied(self):
        context = {"user": "u1"}
        result = create_handoff(Agent(name="X", model="m")).invoke(context, {})

        assert result.context_variables == context
        assert result.context_variables is not context


class TestConditionalHandoff:
    def test_first_matching_condition_wins(self):
        vip = Agent(name="VIP", model="m")
        regular = Agent(name="Regular", model="m")
        act = create_conditional_handoff([
            HandoffCondition(lambda ctx: ctx.get("tier") == "gold", vip, {"lane": "fast"}),
            HandoffCondition(lambda ctx: True, regular),
        ])

        result = act.invoke({"tier": "gold"}, {})

        assert result.agent is vip
        assert result.context_variables == {"tier": "gold", "lane": "fast"}
        assert "VIP, Regular" in act.description

    def test_no_match_returns_none(self):
        act = create_conditional_handoff([HandoffCondition(lambda ctx: False, Agent(name="A", model="m"))])
        assert act.invoke({}, {}) is None
