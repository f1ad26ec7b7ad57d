import httpx
import pytest

from src.adapters.outbound.jira_adapter import JiraAdapter

BASE_URL = "https://jira.example.com/"

PROJECT_BODY = {
    "self": "https://jira.example.com/rest/api/2/project/10000",
    "id": "10000",
    "key": "PC",
    "name": "Platform Care",
    "issueTypes": [
        {
            "self": "https://jira.example.com/rest/api/2/issuetype/10001",
            "id": "10001",
            "description": "A task that needs to be done.",
            "iconUrl": "https://jira.example.com/images/icons/task.svg",
            "name": "Task",
            "subtask": False,
        },
        {
            "self": "https://jira.example.com/rest/api/2/issuetype/10002",
            "id": "10002",
            "description": "Ask for help.",
            "iconUrl": "https://jira.example.com/images/icons/help.svg",
            "name": "Help",
            "subtask": False,
        },
    ],
}

FIELDS_BODY = {
    "maxResults": 50,
    "startAt": 0,
    "total": 3,
    "isLast": True,
    "values": [
        {
            "fieldId": "summary",
            "required": True,
            "name": "Summary",
            "schema": {"type": "string", "system": "summary"},
            "hasDefaultValue": False,
            "operations": ["set"],
        },
        {
            "fieldId": "labels",
            "required": False,
            "name": "Labels",
            "schema": {"type": "array", "items": "string", "system": "labels"},
            "operations": ["add", "set", "remove"],
        },
        {
            "fieldId": "customfield_10806",
            "required": True,
            "name": "Epic Link",
            "schema": {
                "type": "any",
                "custom": "com.pyxis.greenhopper.jira:gh-epic-link",
                "customId": 10806,
            },
            "hasDefaultValue": False,
            "operations": ["set"],
        },
    ],
}


def make_adapter(handler) -> JiraAdapter:
    client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return JiraAdapter(client=client)


def jira_handler(project_body=PROJECT_BODY, fields_body=FIELDS_BODY, seen=None):
    """project / createmeta 경로에 고정 응답을 돌려주는 MockTransport 핸들러"""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        path = request.url.path
        if path == "/rest/api/2/project/PC":
            return httpx.Response(200, json=project_body)
        if path.startswith("/rest/api/2/issue/createmeta/PC/issuetypes/"):
            return httpx.Response(200, json=fields_body)
        return httpx.Response(404, json={"errorMessages": ["not found"]})

    return handler


@pytest.fixture
def adapter() -> JiraAdapter:
    return make_adapter(jira_handler())
