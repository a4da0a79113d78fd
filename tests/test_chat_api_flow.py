from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from afrotech.apps.api import deps
from afrotech.core.http.errors import AfrotechHTTPNetworkError

ROUTING = {
    "primary_director": "Business Operations Director",
    "supporting_directors": [],
    "execution_order": ["Business Operations Director"],
    "user_intent": "launch marketing for a coffee shop",
    "complexity_level": "moderate",
    "estimated_time": "2 days",
}
PLAN = {
    "director_name": "Business Operations Director",
    "assigned_managers": ["Content Manager", "Research Manager"],
    "execution_steps": [{"manager": "Content Manager", "task": "Draft launch posts", "agents_needed": ["Instagram Agent"]}],
    "expected_outcomes": ["A two-week launch calendar"],
}
SYNTHESIS = "Here is your coffee shop launch plan: two weeks of posts and a local research brief."


@pytest.fixture
def client(api_state):
    from afrotech.apps.api.main import app

    with TestClient(app) as test_client:
        yield test_client


def test_coffee_shop_request_runs_end_to_end(client, script) -> None:
    script.queue(ROUTING, PLAN, SYNTHESIS)

    response = client.post("/chat/", json={"message": "Plan marketing for my new coffee shop"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "completed"
    assert body["response"] == SYNTHESIS
    assert body["primary_director"] == "Business Operations Director"
    assert body["assigned_agents"] == ["Business Operations Director"]
    assert len(script.calls) == 3
    assert "Plan marketing for my new coffee shop" in script.calls[2]["user"]

    task = client.get(f"/tasks/{body['task_id']}").json()
    assert task["status"] == "completed"
    assert task["result"] == SYNTHESIS
    assert task["assigned_agents"] == ["Business Operations Director"]
    assert task["user_request"] == "Plan marketing for my new coffee shop"
    assert any(entry["action"] == "Routing to Business Operations Director" for entry in task["execution_log"])

    messages = client.get("/chat/conversation").json()["messages"]
    assert [message["role"] for message in messages] == ["user", "assistant"]
    assert messages[1]["agent_name"] == "Master Orchestrator"
    assert messages[1]["timestamp"] >= messages[0]["timestamp"]

    activity = client.get("/activity").json()
    assert activity["is_processing"] is False
    actions = [entry["action"] for entry in activity["activities"]]
    assert actions == [
        "Analyzing request...",
        "Routing to Business Operations Director",
        "Execution plan ready",
        "Task completed successfully",
    ]

    audit = deps.get_data_store().entity("AuditLog").list()
    assert [entry["action_type"] for entry in audit] == ["task_completion"]


def test_provider_outage_marks_task_failed(client, script) -> None:
    script.queue(AfrotechHTTPNetworkError("connection refused"), AfrotechHTTPNetworkError("connection refused"))

    body = client.post("/chat/", json={"message": "Plan marketing for my new coffee shop"}).json()

    assert body["status"] == "failed"
    assert body["response"].startswith("I encountered an issue processing your request: Could not determine which director")
    assert len(script.calls) == 2

    task = client.get(f"/tasks/{body['task_id']}").json()
    assert task["status"] == "failed"
    assert task["result"] == body["response"]

    messages = client.get("/chat/conversation").json()["messages"]
    assert messages[-1]["role"] == "assistant"
    assert messages[-1]["agent_name"] is None
    assert client.get("/activity").json()["activities"][-1]["status"] == "failed"


def test_director_failure_after_routing_is_reported(client, script) -> None:
    script.queue(ROUTING, "this is not json")

    body = client.post("/chat/", json={"message": "Plan marketing for my new coffee shop"}).json()

    assert body["status"] == "failed"
    assert body["assigned_agents"] == ["Business Operations Director"]
    assert client.get(f"/tasks/{body['task_id']}").json()["status"] == "failed"


def test_identical_messages_create_separate_tasks(client, script) -> None:
    script.queue(ROUTING, PLAN, SYNTHESIS, ROUTING, PLAN, SYNTHESIS)

    first = client.post("/chat/", json={"message": "Same question"}).json()
    second = client.post("/chat/", json={"message": "Same question"}).json()

    assert first["task_id"] != second["task_id"]
    listing = client.get("/tasks", params={"q": "same"}).json()
    assert {task["id"] for task in listing["tasks"]} == {first["task_id"], second["task_id"]}
    # second routing prompt carries the first exchange as history
    assert "user: Same question" in script.calls[3]["user"]


def test_empty_message_rejected(client, script) -> None:
    response = client.post("/chat/", json={"message": "   "})

    assert response.status_code == 400
    assert script.calls == []


def test_busy_session_rejects_second_message(client, script) -> None:
    deps.get_session_registry().get("local").is_processing = True

    response = client.post("/chat/", json={"message": "Anything"})

    assert response.status_code == 409
    assert script.calls == []


def test_tasks_are_scoped_to_their_user(client, script) -> None:
    script.queue(ROUTING, PLAN, SYNTHESIS)
    body = client.post("/chat/", json={"message": "Mine"}, headers={"X-AFROTECH-USER": "ama"}).json()

    assert client.get(f"/tasks/{body['task_id']}", headers={"X-AFROTECH-USER": "kofi"}).status_code == 404
    assert client.get("/tasks", headers={"X-AFROTECH-USER": "kofi"}).json()["tasks"] == []
    assert client.get("/chat/conversation", headers={"X-AFROTECH-USER": "kofi"}).json() == {"id": None, "messages": []}


def test_quick_actions_have_defaults(client) -> None:
    body = client.get("/chat/quick-actions").json()

    assert body["agency_name"] == "Afro-Tech AI Command"
    assert body["quick_actions"]
    assert all(action["prompt"] for action in body["quick_actions"])


def test_contacts_crud_and_tenancy(client) -> None:
    created = client.post("/contacts", json={"name": "Ama Mensah", "email": "ama@example.com"}).json()
    assert created["status"] == "lead"
    assert created["created_by"] == "local"

    updated = client.patch(f"/contacts/{created['id']}", json={"status": "client"}).json()
    assert updated["status"] == "client"
    assert [contact["id"] for contact in client.get("/contacts", params={"status": "client"}).json()] == [created["id"]]

    other = {"X-AFROTECH-USER": "kofi"}
    assert client.get("/contacts", headers=other).json() == []
    assert client.patch(f"/contacts/{created['id']}", json={"status": "lead"}, headers=other).status_code == 404
    assert client.delete(f"/contacts/{created['id']}", headers=other).status_code == 404

    deleted = client.delete(f"/contacts/{created['id']}").json()
    assert deleted["deleted"] is True
    assert client.get("/contacts").json() == []


def test_content_calendar_entry(client) -> None:
    response = client.post(
        "/content-calendar",
        json={"title": "Opening day reel", "platform": "Instagram", "scheduled_for": "2026-11-01T09:00:00Z"},
    )

    assert response.status_code == 200
    assert [entry["title"] for entry in client.get("/content-calendar").json()] == ["Opening day reel"]


def test_powerup_execution_runs_rendered_prompt(client, script) -> None:
    created = client.post(
        "/powerups",
        json={"name": "Launch plan", "prompt_template": "Plan a {channel} launch for {product}"},
    ).json()
    assert created["variables"] == ["channel", "product"]

    script.queue(ROUTING, PLAN, SYNTHESIS)
    body = client.post(
        f"/powerups/{created['id']}/execute",
        json={"inputs": {"channel": "TikTok", "product": "cold brew"}},
    ).json()

    assert body["prompt"] == "Plan a TikTok launch for cold brew"
    assert body["status"] == "completed"
    assert "Plan a TikTok launch for cold brew" in script.calls[0]["user"]

    assert client.post("/powerups/missing/execute", json={"inputs": {}}).status_code == 404


def test_security_profile_drives_compliance(client) -> None:
    assert client.get("/security/profile").json()["id"] is None

    profile = client.put("/security/profile", json={"compliance_level": "HIPAA", "mfa_enabled": True}).json()
    assert profile["compliance_level"] == "HIPAA"

    check = client.post("/security/compliance/check", json={"action": {"type": "message", "details": "lab results"}}).json()
    assert check["compliance_level"] == "HIPAA"
    assert "phi_protection" in check["checks_passed"]

    audit = deps.get_data_store().entity("AuditLog").list()
    assert [entry["action_type"] for entry in audit] == ["security_profile_update"]


def test_roles_listing_and_execution(client, script) -> None:
    directors = client.get("/roles", params={"kind": "director"}).json()["roles"]
    assert len(directors) == 6

    hierarchy = client.get("/roles/hierarchy").json()
    assert hierarchy["director_agent"]["name"] == "Director Agent"

    assert client.post("/roles/Chief Vibes Director/execute", json={"task": "x"}).status_code == 404

    script.queue({"qualification_score": 40, "qualification_level": "cold"})
    executed = client.post("/roles/Lead Qualification Agent/execute", json={"task": "Acme Corp"}).json()
    assert executed["kind"] == "agent"
    assert executed["result"]["qualification_level"] == "cold"

    assert client.post("/roles/Closing Agent/execute", json={"task": "Acme Corp"}).status_code == 502


def test_unknown_director_in_execution_order_fails_task(client, script) -> None:
    script.queue({**ROUTING, "execution_order": ["Chief Vibes Director"]})

    body = client.post("/chat/", json={"message": "Plan marketing for my new coffee shop"}).json()

    assert body["status"] == "failed"
    assert "Chief Vibes Director" in body["response"]
    assert body["assigned_agents"] == ["Chief Vibes Director"]
    assert len(script.calls) == 1

    task = client.get(f"/tasks/{body['task_id']}").json()
    assert task["status"] == "failed"
    assert task["assigned_agents"] == ["Chief Vibes Director"]


def test_agent_interaction_endpoints(client) -> None:
    created = client.post(
        "/roles/interactions",
        json={
            "requesting_agent": "Instagram Agent",
            "target_agent": "Graphic Design Agent",
            "request_context": {"need": "carousel visuals"},
            "task_id": "t1",
        },
    )
    assert created.status_code == 200
    interaction = created.json()
    assert interaction["status"] == "pending"
    assert interaction["task_id"] == "t1"

    completed = client.post(
        f"/roles/interactions/{interaction['id']}/complete",
        json={"response": "three concepts", "data_shared": {"palette": ["#000"]}},
    ).json()
    assert completed["status"] == "completed"
    assert completed["data_shared"] == {"palette": ["#000"]}

    stored = deps.get_data_store().entity("AgentInteraction").get(interaction["id"])
    assert stored["response"] == "three concepts"

    assert client.post("/roles/interactions/missing/complete", json={"response": "x"}).status_code == 404
