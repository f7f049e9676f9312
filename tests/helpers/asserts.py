from typing import Optional, Dict, Any
from fastapi.testclient import TestClient

def api_call(client: TestClient, method: str, path: str, headers: Optional[Dict[str, str]] = None, json: Optional[Dict[str, Any]] = None, expected_min: int = 200, expected_max: int = 300):
    response = client.request(method, path, headers=headers, json=json)
    ok = expected_min <= response.status_code < expected_max
    try:
        body = response.json()
    except Exception:
        body = response.text
    assert ok, f"{method} {path} => {response.status_code}, body={body}, json={json}"
    return response

def assert_error(response, status_code: int, code: str):
    assert response.status_code == status_code, f"expected {status_code}, got {response.status_code}: {response.text}"
    body = response.json()
    assert body["error"]["code"] == code
    assert body["request_id"]
    return body["error"]

def watch(client: TestClient, headers: Dict[str, str], course_id: int, section_id: int, video_id: int):
    return api_call(client, "POST", "/api/video-watched", headers=headers,
                    json={"courseId": course_id, "sectionId": section_id, "videoId": video_id})
