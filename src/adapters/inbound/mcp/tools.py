import logging
import sys
import traceback
from functools import partial

import anyio.to_thread
from mcp.server import Server
from mcp.types import TextContent, Tool

from src.configuration.container import Container, build_container
from src.domain.errors import IssueTypeNotFound, MissingRequiredFields, UnknownFields

logger = logging.getLogger(__name__)


async def _run_blocking(func, **kwargs):
    """동기 Use Case(httpx.Client 호출)를 워커 스레드에서 실행해 이벤트 루프를 막지 않습니다."""
    return await anyio.to_thread.run_sync(partial(func, **kwargs))


def _require(arguments: dict, name: str) -> str:
    value = str(arguments.get(name) or "").strip()
    if not value:
        raise ValueError(f"{name} 파라미터가 필요합니다")
    return value


def format_create_meta(result: dict) -> str:
    text = "# 📊 Jira createmeta\n\n"
    text += f"**프로젝트:** `{result['project_key']}` {result['project_name']} (id={result['project_id']})\n\n"
    text += f"**이슈 유형 수:** {len(result['issue_types'])}개\n\n"
    text += "| 번호 | ID | 이름 | 하위 작업 | 설명 |\n"
    text += "|------|----|------|-----------|------|\n"
    for i, t in enumerate(result["issue_types"], 1):
        subtask = "✅" if t["subtask"] else ""
        text += f"| {i} | {t['id']} | {t['name']} | {subtask} | {t['description']} |\n"
    return text


def format_issue_type_fields(result: dict) -> str:
    mandatory: dict = result["mandatory_fields"]
    issue_type = result["issue_type"]

    text = "# 🧾 이슈 유형 필드\n\n"
    text += f"**프로젝트 키:** `{result['project_key']}`\n\n"
    text += f"**이슈 유형:** {issue_type['name']} (id={issue_type['id']})\n\n"
    text += f"**필드 수:** 필수 {len(mandatory)}개 / 전체 {len(result['all_fields'])}개\n\n"
    text += "| 필드 이름 | 필드 키 | 필수 |\n"
    text += "|-----------|---------|------|\n"
    for name, key in sorted(result["all_fields"].items()):
        required = "✅" if name in mandatory else ""
        text += f"| {name} | `{key}` | {required} |\n"
    return text


def format_check_result(result: dict) -> str:
    text = "# ✅ 필드 검증 통과\n\n"
    text += f"**프로젝트 키:** `{result['project_key']}`\n\n"
    text += f"**이슈 유형:** {result['issue_type']}\n\n"
    text += "필수 필드가 모두 포함되어 있고, 모든 필드가 사용 가능합니다.\n\n"
    for name, key in sorted(result["fields"].items()):
        text += f"- {name} → `{key}`\n"
    return text


def format_reload_result(result: dict) -> str:
    text = "# 🔄 필드 매핑 리로드 완료\n\n"
    text += f"**파일:** `{result['path']}`\n\n"
    text += f"**필드 수:** {result['field_count']}개\n\n"
    for name, key in sorted(result["fields"].items()):
        text += f"- {name} → `{key}`\n"
    return text


def format_error(name: str, e: Exception) -> str:
    if isinstance(e, MissingRequiredFields):
        detail = "**누락된 필수 필드:**\n\n" + "".join(f"- {n}\n" for n in e.missing)
    elif isinstance(e, UnknownFields):
        detail = "**사용할 수 없는 필드:**\n\n" + "".join(f"- {n}\n" for n in e.unknown)
        detail += "\n**사용 가능한 필드:** " + ", ".join(e.available) + "\n"
    elif isinstance(e, IssueTypeNotFound):
        detail = f"**사용 가능한 이슈 유형:** {', '.join(e.available)}\n"
    else:
        detail = ""

    return f"""# ❌ 오류 발생

**Tool:** {name}
**오류 타입:** {type(e).__name__}
**오류 메시지:** {str(e)}

{detail}
자세한 내용은 서버 로그를 확인하세요."""


async def handle_tool_call(
    name: str,
    arguments: dict,
    container: Container | None = None,
) -> list[TextContent]:
    """Tool 호출을 처리합니다. 실패 시 오류 내용을 Markdown 으로 반환합니다."""
    try:
        container = container or build_container()
        logger.info("=" * 60)
        logger.info("🔧 Tool 호출: %s", name)
        logger.info("인자: %s", arguments)
        logger.info("=" * 60)

        if name == "get_create_meta":
            project_key = _require(arguments, "project_key").upper()
            result = await _run_blocking(
                container.get_create_meta_use_case.execute,
                project_key=project_key,
            )
            logger.info("✅ Tool 실행 완료: 프로젝트 %s createmeta 조회됨", project_key)
            return [TextContent(type="text", text=format_create_meta(result))]

        if name == "get_issue_type_fields":
            project_key = _require(arguments, "project_key").upper()
            issue_type = _require(arguments, "issue_type")
            result = await _run_blocking(
                container.get_issue_type_fields_use_case.execute,
                project_key=project_key,
                issue_type_name=issue_type,
            )
            logger.info("✅ Tool 실행 완료: %s/%s 필드 조회됨", project_key, issue_type)
            return [TextContent(type="text", text=format_issue_type_fields(result))]

        if name == "check_issue_fields":
            project_key = _require(arguments, "project_key").upper()
            issue_type = _require(arguments, "issue_type")
            fields = arguments.get("fields")
            if fields is not None and not isinstance(fields, dict):
                raise ValueError("fields 는 {필드 이름: 필드 키} 객체여야 합니다")
            result = await _run_blocking(
                container.check_issue_fields_use_case.execute,
                project_key=project_key,
                issue_type_name=issue_type,
                fields=fields,
            )
            logger.info("✅ Tool 실행 완료: %s/%s 필드 검증 통과", project_key, issue_type)
            return [TextContent(type="text", text=format_check_result(result))]

        if name == "reload_field_mapping":
            result = container.reload_field_mapping_use_case.execute()
            logger.info("✅ Tool 실행 완료: 필드 매핑 %d개 리로드", result["field_count"])
            return [TextContent(type="text", text=format_reload_result(result))]

        raise ValueError(f"알 수 없는 tool: {name}")

    except Exception as e:
        logger.error("=" * 60)
        logger.error("❌ Tool 실행 실패!")
        logger.error("Tool: %s", name)
        logger.error("오류 타입: %s", type(e).__name__)
        logger.error("오류 메시지: %s", str(e))
        logger.error("=" * 60)
        traceback.print_exc(file=sys.stderr)

        return [TextContent(type="text", text=format_error(name, e))]


TOOLS = [
    Tool(
        name="get_create_meta",
        description="Jira 프로젝트의 createmeta(프로젝트 정보와 이슈 유형 목록)를 조회합니다.",
        inputSchema={
            "type": "object",
            "properties": {
                "project_key": {
                    "type": "string",
                    "description": "Jira 프로젝트 키 (예: 'PC')",
                }
            },
            "required": ["project_key"],
        },
    ),
    Tool(
        name="get_issue_type_fields",
        description="""이슈 유형의 필드 목록을 조회합니다.

필드 이름(화면에 보이는 이름)과 필드 키(예: customfield_10806), 필수 여부를 함께 보여줍니다.
이슈 유형 이름은 대소문자를 구분하지 않습니다.""",
        inputSchema={
            "type": "object",
            "properties": {
                "project_key": {
                    "type": "string",
                    "description": "Jira 프로젝트 키 (예: 'PC')",
                },
                "issue_type": {
                    "type": "string",
                    "description": "이슈 유형 이름 (예: 'Help', 'Task')",
                },
            },
            "required": ["project_key", "issue_type"],
        },
    ),
    Tool(
        name="check_issue_fields",
        description="""이슈 생성 전에 필드 매핑을 검증합니다.

1. 필수 필드가 모두 포함되어 있는지
2. 포함된 필드가 모두 해당 이슈 유형에서 사용 가능한지

fields 를 생략하면 서버에 설정된 필드 매핑 파일(jira.fields)을 사용합니다.""",
        inputSchema={
            "type": "object",
            "properties": {
                "project_key": {
                    "type": "string",
                    "description": "Jira 프로젝트 키 (예: 'PC')",
                },
                "issue_type": {
                    "type": "string",
                    "description": "이슈 유형 이름 (예: 'Help')",
                },
                "fields": {
                    "type": "object",
                    "description": "{필드 이름: 필드 키} (예: {'Summary': 'summary', 'Epic Link': 'customfield_10806'})",
                    "additionalProperties": {"type": "string"},
                },
            },
            "required": ["project_key", "issue_type"],
        },
    ),
    Tool(
        name="reload_field_mapping",
        description="필드 매핑 파일(jira.fields) 캐시를 무효화하고 다시 로드합니다.",
        inputSchema={
            "type": "object",
            "properties": {},
        },
    ),
]


def register_tools(app: Server) -> None:
    """MCP Tool 핸들러를 서버에 등록합니다."""

    @app.call_tool()
    async def call_tool(name: str, arguments: dict):
        return await handle_tool_call(name, arguments)

    @app.list_tools()
    async def list_tools():
        return TOOLS
