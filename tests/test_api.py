"""
REST API 통합 테스트 (TestClient + 메모리 SQLite).
"""
import pytest

from app.seed.bookmarks_seed import seed_demo_data
from app.utils.bookmark_search import NO_CRITERIA_MESSAGE


@pytest.fixture
def demo_client(db_session, client):
    assert seed_demo_data(db_session) is True
    return client


def _folder_id(client, name):
    tree = client.get("/api/v1/folders/tree").json()
    stack = list(tree)
    while stack:
        node = stack.pop()
        if node["name"] == name:
            return node["id"]
        stack.extend(node["children"])
    raise AssertionError(f"folder {name} not in tree")


def test_root(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.json() == {"message": "Hello World!"}


# ---------------- search ----------------

def test_search_requires_criteria(client):
    res = client.get("/api/v1/bookmarks/search")

    assert res.status_code == 400
    body = res.json()
    assert body["detail"] == NO_CRITERIA_MESSAGE
    assert body["type"] == "validation_error"
    assert body["path"] == "/api/v1/bookmarks/search"


def test_search_by_keyword(demo_client):
    res = demo_client.get("/api/v1/bookmarks/search", params={"keyword": "JPA"})

    assert res.status_code == 200
    page = res.json()
    assert page["total_elements"] == 1
    assert page["items"][0]["title"] == "Spring Data JPA 공식 문서"
    assert page["items"][0]["folder_name"] == "개발"


def test_search_ranks_complete_tag_match_above_keyword_only(demo_client):
    res = demo_client.get(
        "/api/v1/bookmarks/search",
        params={"keyword": "기획", "tags": "여행"},
    )

    page = res.json()
    # 여행 태그 전체 일치(105) > 제목 키워드 일치(20)
    assert [b["title"] for b in page["items"]] == ["여름 휴가 계획", "초기 기획서"]
    assert page["total_elements"] == 2
    assert page["page_index"] == 0
    assert page["has_next"] is False


def test_search_tags_repeated_or_comma_separated(demo_client):
    repeated = demo_client.get(
        "/api/v1/bookmarks/search", params=[("tags", "기획"), ("tags", "프로젝트A")]
    ).json()
    comma = demo_client.get("/api/v1/bookmarks/search", params={"tags": "기획,프로젝트A"}).json()

    assert [b["title"] for b in repeated["items"]] == ["초기 기획서"]
    assert repeated["items"] == comma["items"]


def test_search_tags_case_insensitive(demo_client):
    page = demo_client.get("/api/v1/bookmarks/search", params={"tags": "jpa"}).json()

    assert [b["title"] for b in page["items"]] == ["Spring Data JPA 공식 문서"]


def test_search_page_out_of_range_is_empty(demo_client):
    page = demo_client.get(
        "/api/v1/bookmarks/search", params={"tags": "여행", "page": 5, "size": 10}
    ).json()

    assert page["items"] == []
    assert page["total_elements"] == 1


def test_search_size_above_max_rejected(demo_client):
    res = demo_client.get("/api/v1/bookmarks/search", params={"keyword": "a", "size": 1000})
    assert res.status_code == 422


# ---------------- folders ----------------

def test_tree(demo_client):
    res = demo_client.get("/api/v1/folders/tree")

    assert res.status_code == 200
    tree = res.json()
    assert [r["name"] for r in tree] == ["업무", "개인"]
    work = tree[0]
    assert [c["name"] for c in work["children"]] == ["프로젝트A", "프로젝트B"]
    project_a = work["children"][0]
    assert [c["name"] for c in project_a["children"]] == ["기획", "개발"]
    assert [b["title"] for b in project_a["children"][0]["bookmarks"]] == ["초기 기획서"]
    assert [b["title"] for b in tree[1]["bookmarks"]] == ["여름 휴가 계획"]


def test_tree_empty(client):
    assert client.get("/api/v1/folders/tree").json() == []


def test_create_and_get_folder(client):
    res = client.post("/api/v1/folders", json={"name": "업무"})
    assert res.status_code == 201
    root = res.json()
    assert root["parent_id"] is None

    child = client.post("/api/v1/folders", json={"name": "회의록", "parent_id": root["id"]}).json()

    assert client.get(f"/api/v1/folders/{child['id']}").json()["name"] == "회의록"
    assert [f["id"] for f in client.get("/api/v1/folders/top").json()] == [root["id"]]
    children = client.get(f"/api/v1/folders/{root['id']}/children").json()
    assert [f["name"] for f in children] == ["회의록"]


def test_create_folder_missing_parent(client):
    res = client.post("/api/v1/folders", json={"name": "x", "parent_id": 999})

    assert res.status_code == 404
    assert res.json()["type"] == "resource_not_found"


def test_create_folder_duplicate_sibling(client):
    client.post("/api/v1/folders", json={"name": "업무"})

    res = client.post("/api/v1/folders", json={"name": "업무"})

    assert res.status_code == 409
    assert res.json()["type"] == "conflict"


def test_create_folder_blank_name(client):
    assert client.post("/api/v1/folders", json={"name": "   "}).status_code == 422


def test_get_folder_not_found(client):
    assert client.get("/api/v1/folders/42").status_code == 404


def test_move_folder_under_descendant_rejected(demo_client):
    work_id = _folder_id(demo_client, "업무")
    plan_id = _folder_id(demo_client, "기획")

    res = demo_client.put(f"/api/v1/folders/{work_id}", json={"parent_id": plan_id})

    assert res.status_code == 400
    assert res.json()["type"] == "business_logic_error"


def test_folder_cannot_be_own_parent(demo_client):
    work_id = _folder_id(demo_client, "업무")

    res = demo_client.put(f"/api/v1/folders/{work_id}", json={"parent_id": work_id})

    assert res.status_code == 400


def test_move_folder_to_root_with_explicit_null(demo_client):
    dev_id = _folder_id(demo_client, "개발")

    res = demo_client.put(f"/api/v1/folders/{dev_id}", json={"parent_id": None})

    assert res.status_code == 200
    assert res.json()["parent_id"] is None
    assert [r["name"] for r in demo_client.get("/api/v1/folders/tree").json()] == ["업무", "개인", "개발"]


def test_rename_keeps_parent_when_omitted(demo_client):
    dev_id = _folder_id(demo_client, "개발")
    project_a_id = _folder_id(demo_client, "프로젝트A")

    res = demo_client.put(f"/api/v1/folders/{dev_id}", json={"name": "백엔드"})

    assert res.json()["name"] == "백엔드"
    assert res.json()["parent_id"] == project_a_id


def test_rename_to_sibling_name_conflicts(demo_client):
    dev_id = _folder_id(demo_client, "개발")

    res = demo_client.put(f"/api/v1/folders/{dev_id}", json={"name": "기획"})

    assert res.status_code == 409


def test_delete_non_empty_folder_needs_force(demo_client):
    work_id = _folder_id(demo_client, "업무")

    assert demo_client.delete(f"/api/v1/folders/{work_id}").status_code == 409

    assert demo_client.delete(f"/api/v1/folders/{work_id}", params={"force": True}).status_code == 204
    assert [r["name"] for r in demo_client.get("/api/v1/folders/tree").json()] == ["개인"]
    # 하위 북마크도 함께 삭제됨
    page = demo_client.get("/api/v1/bookmarks/search", params={"tags": "기획,Spring"}).json()
    assert page["total_elements"] == 0


def test_delete_empty_folder(demo_client):
    project_b_id = _folder_id(demo_client, "프로젝트B")

    assert demo_client.delete(f"/api/v1/folders/{project_b_id}").status_code == 204
    assert demo_client.get(f"/api/v1/folders/{project_b_id}").status_code == 404


# ---------------- bookmarks ----------------

def test_bookmark_crud(demo_client):
    personal_id = _folder_id(demo_client, "개인")

    res = demo_client.post(
        "/api/v1/bookmarks",
        json={
            "title": "FastAPI 문서",
            "url": "https://fastapi.tiangolo.com",
            "description": "파이썬 웹 프레임워크",
            "folder_id": personal_id,
            "tag_names": ["Python", "java"],
        },
    )
    assert res.status_code == 201
    created = res.json()
    # 기존 Java 태그를 재사용하고 Python은 새로 생성
    assert sorted(t["name"] for t in created["tags"]) == ["Java", "Python"]
    assert created["folder_name"] == "개인"

    fetched = demo_client.get(f"/api/v1/bookmarks/{created['id']}").json()
    assert fetched["title"] == "FastAPI 문서"

    updated = demo_client.put(
        f"/api/v1/bookmarks/{created['id']}",
        json={"title": "  ", "description": "", "tag_names": ["Python"]},
    ).json()
    assert updated["title"] == "FastAPI 문서"
    assert updated["description"] == ""
    assert [t["name"] for t in updated["tags"]] == ["Python"]

    assert demo_client.delete(f"/api/v1/bookmarks/{created['id']}").status_code == 204
    assert demo_client.get(f"/api/v1/bookmarks/{created['id']}").status_code == 404
    # 태그는 남아 있음
    names = [t["name"] for t in demo_client.get("/api/v1/tags").json()]
    assert "Python" in names


def test_create_bookmark_missing_folder(client):
    res = client.post(
        "/api/v1/bookmarks",
        json={"title": "x", "url": "https://example.com", "folder_id": 123},
    )
    assert res.status_code == 404


def test_create_bookmark_invalid_url(demo_client):
    res = demo_client.post(
        "/api/v1/bookmarks",
        json={"title": "x", "url": "ftp://example.com", "folder_id": _folder_id(demo_client, "개인")},
    )
    assert res.status_code == 422


def test_move_bookmark_to_missing_folder(demo_client):
    page = demo_client.get("/api/v1/bookmarks/search", params={"tags": "여행"}).json()
    bookmark_id = page["items"][0]["id"]

    res = demo_client.put(f"/api/v1/bookmarks/{bookmark_id}", json={"folder_id": 9999})

    assert res.status_code == 404


def test_list_folder_bookmarks(demo_client):
    dev_id = _folder_id(demo_client, "개발")

    page = demo_client.get(f"/api/v1/folders/{dev_id}/bookmarks").json()

    assert page["total_elements"] == 1
    assert page["page_size"] == 10
    assert page["items"][0]["title"] == "Spring Data JPA 공식 문서"


def test_list_bookmarks_of_missing_folder(client):
    assert client.get("/api/v1/folders/77/bookmarks").status_code == 404


# ---------------- tags ----------------

def test_tag_crud(client):
    res = client.post("/api/v1/tags", json={"name": " Rust "})
    assert res.status_code == 201
    tag = res.json()
    assert tag["name"] == "Rust"

    assert client.post("/api/v1/tags", json={"name": "rust"}).status_code == 409

    renamed = client.put(f"/api/v1/tags/{tag['id']}", json={"name": "Rust-lang"}).json()
    assert renamed["name"] == "Rust-lang"
    assert client.get(f"/api/v1/tags/{tag['id']}").json()["name"] == "Rust-lang"

    assert client.delete(f"/api/v1/tags/{tag['id']}").status_code == 204
    assert client.get(f"/api/v1/tags/{tag['id']}").status_code == 404


def test_tags_listed_by_name(demo_client):
    names = [t["name"] for t in demo_client.get("/api/v1/tags").json()]

    assert names == sorted(names)
    assert set(names) == {"Java", "Spring", "JPA", "프로젝트A", "여행", "기획"}


def test_delete_tag_detaches_from_bookmarks(demo_client):
    tags = {t["name"]: t["id"] for t in demo_client.get("/api/v1/tags").json()}

    assert demo_client.delete(f"/api/v1/tags/{tags['여행']}").status_code == 204

    res = demo_client.get("/api/v1/bookmarks/search", params={"keyword": "휴가"}).json()
    assert res["items"][0]["tags"] == []


def test_search_trims_comma_separated_tags(demo_client):
    page = demo_client.get("/api/v1/bookmarks/search", params={"tags": "기획, 프로젝트A"}).json()

    assert [b["title"] for b in page["items"]] == ["초기 기획서"]
