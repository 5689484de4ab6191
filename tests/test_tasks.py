# tests/test_tasks.py

import pytest

from todoapp.models import Subtask, Task


@pytest.fixture()
def user(make_user):
    return make_user("owner")


def list_tasks(client, user_id, **params):
    response = client.get(f"/api/tasks/user/{user_id}", params=params)
    assert response.status_code == 200, response.text
    return response.json()


def complete(client, task_id, when="2024-05-01T12:00:00"):
    response = client.patch(
        f"/api/tasks/{task_id}",
        json={"completedDate": when, "completedDateProvided": True},
    )
    assert response.status_code == 200, response.text
    return response.json()


def test_create_task_for_missing_user_is_not_found(client):
    response = client.post("/api/tasks", json={"userId": 999, "taskName": "Orphan", "description": ""})

    assert response.status_code == 404
    body = response.json()
    assert body["title"] == "Resource not found"
    assert body["detail"] == "User with ID 999 does not exist."
    assert body["instance"] == "/api/tasks"


def test_create_then_get_round_trips(client, user, make_task):
    created = make_task(user["userId"], "Buy milk", "Semi-skimmed")

    assert created["completedDate"] is None
    response = client.get(f"/api/tasks/{created['taskId']}")

    assert response.status_code == 200
    fetched = response.json()
    assert fetched["taskId"] == created["taskId"]
    assert fetched["userId"] == user["userId"]
    assert fetched["taskName"] == "Buy milk"
    assert fetched["description"] == "Semi-skimmed"
    assert fetched["createdDate"] == created["createdDate"]
    assert fetched["completedDate"] is None
    assert fetched["subtasks"] == []


def test_task_name_validation(client, user):
    too_long = client.post("/api/tasks", json={"userId": user["userId"], "taskName": "x" * 256})
    empty = client.post("/api/tasks", json={"userId": user["userId"], "taskName": ""})

    assert too_long.status_code == 400
    assert empty.status_code == 400


def test_get_missing_task_is_not_found(client):
    response = client.get("/api/tasks/12345")
    assert response.status_code == 404
    assert response.json()["detail"] == "Task with ID 12345 does not exist."


def test_pagination(client, user, make_task):
    for i in range(5):
        make_task(user["userId"], f"Task {i}")

    page1 = list_tasks(client, user["userId"], pageNumber=1, pageSize=2)
    page3 = list_tasks(client, user["userId"], pageNumber=3, pageSize=2)

    assert len(page1["tasks"]) == 2
    assert page1["hasMore"] is True
    assert page1["totalCount"] == 5
    assert page1["pageNumber"] == 1
    assert page1["pageSize"] == 2

    assert len(page3["tasks"]) == 1
    assert page3["hasMore"] is False
    assert page3["totalCount"] == 5


def test_pages_do_not_overlap(client, user, make_task):
    for i in range(5):
        make_task(user["userId"], f"Task {i}")

    seen = []
    for page in (1, 2, 3):
        seen += [t["taskId"] for t in list_tasks(client, user["userId"], pageNumber=page, pageSize=2)["tasks"]]

    assert len(seen) == len(set(seen)) == 5


def test_without_paging_returns_everything(client, user, make_task):
    for i in range(3):
        make_task(user["userId"], f"Task {i}")

    result = list_tasks(client, user["userId"])

    assert len(result["tasks"]) == 3
    assert result["totalCount"] == 3
    assert result["pageNumber"] == 1
    assert result["pageSize"] == 3
    assert result["hasMore"] is False


def test_has_more_is_false_with_only_one_paging_parameter(client, user, make_task):
    for i in range(3):
        make_task(user["userId"], f"Task {i}")

    result = list_tasks(client, user["userId"], pageSize=1)

    assert len(result["tasks"]) == 3
    assert result["hasMore"] is False


def test_lists_only_the_users_tasks(client, make_user, make_task):
    owner = make_user("owner")
    other = make_user("other")
    make_task(owner["userId"], "Mine")
    make_task(other["userId"], "Theirs")

    result = list_tasks(client, owner["userId"])

    assert [t["taskName"] for t in result["tasks"]] == ["Mine"]


@pytest.mark.parametrize(
    "params",
    [
        {"pageNumber": 0, "pageSize": 10},
        {"pageNumber": 1, "pageSize": 0},
        {"pageNumber": 1, "pageSize": 101},
        {"sortBy": "priority"},
        {"sortDirection": "sideways"},
        {"completed": "maybe"},
        {"pageNumber": "one"},
    ],
)
def test_invalid_query_parameters(client, user, params):
    response = client.get(f"/api/tasks/user/{user['userId']}", params=params)
    assert response.status_code == 400


def test_completed_filter(client, user, make_task):
    tasks = [make_task(user["userId"], f"Task {i}") for i in range(4)]
    complete(client, tasks[2]["taskId"])

    done = list_tasks(client, user["userId"], completed="true")
    open_ = list_tasks(client, user["userId"], completed="false")

    assert [t["taskId"] for t in done["tasks"]] == [tasks[2]["taskId"]]
    assert done["totalCount"] == 1
    assert tasks[2]["taskId"] not in [t["taskId"] for t in open_["tasks"]]
    assert open_["totalCount"] == 3


def test_search_is_case_insensitive_over_name_and_description(client, user, make_task):
    make_task(user["userId"], "Groceries", "milk and EGGS")
    make_task(user["userId"], "Call EGG farm", "")
    make_task(user["userId"], "Laundry", "whites")

    result = list_tasks(client, user["userId"], searchTerm="  egg ")

    assert sorted(t["taskName"] for t in result["tasks"]) == ["Call EGG farm", "Groceries"]
    assert result["totalCount"] == 2


def test_search_treats_wildcards_literally(client, user, make_task):
    make_task(user["userId"], "100% done")
    make_task(user["userId"], "1000 things")

    result = list_tasks(client, user["userId"], searchTerm="0%")

    assert [t["taskName"] for t in result["tasks"]] == ["100% done"]


def test_default_sort_is_newest_first(client, user, make_task):
    ids = [make_task(user["userId"], f"Task {i}")["taskId"] for i in range(3)]

    result = list_tasks(client, user["userId"])

    assert [t["taskId"] for t in result["tasks"]] == list(reversed(ids))


def test_sort_by_name(client, user, make_task):
    for name in ("banana", "apple", "cherry"):
        make_task(user["userId"], name)

    ascending = list_tasks(client, user["userId"], sortBy="name", sortDirection="asc")
    descending = list_tasks(client, user["userId"], sortBy="NAME", sortDirection="DESC")

    assert [t["taskName"] for t in ascending["tasks"]] == ["apple", "banana", "cherry"]
    assert [t["taskName"] for t in descending["tasks"]] == ["cherry", "banana", "apple"]


def test_sort_by_completed_date_places_incomplete_consistently(client, user, make_task):
    early = make_task(user["userId"], "early")
    late = make_task(user["userId"], "late")
    open_task = make_task(user["userId"], "open")
    complete(client, early["taskId"], "2024-01-01T00:00:00")
    complete(client, late["taskId"], "2024-06-01T00:00:00")

    ascending = list_tasks(client, user["userId"], sortBy="completedDate", sortDirection="asc")
    descending = list_tasks(client, user["userId"], sortBy="completedDate", sortDirection="desc")

    assert [t["taskName"] for t in ascending["tasks"]] == ["open", "early", "late"]
    assert [t["taskName"] for t in descending["tasks"]] == ["late", "early", "open"]
    assert open_task["taskId"] == ascending["tasks"][0]["taskId"]


def test_listed_tasks_include_subtasks(client, user, make_task, make_subtask):
    task = make_task(user["userId"], "With steps")
    make_subtask(task["taskId"], "step one")

    result = list_tasks(client, user["userId"])

    assert [s["description"] for s in result["tasks"][0]["subtasks"]] == ["step one"]


def test_update_changes_only_supplied_fields(client, user, make_task):
    task = make_task(user["userId"], "Original", "Keep me")

    response = client.patch(f"/api/tasks/{task['taskId']}", json={"taskName": "Renamed"})

    assert response.status_code == 200
    body = response.json()
    assert body["taskName"] == "Renamed"
    assert body["description"] == "Keep me"
    assert body["completedDate"] is None


def test_update_completed_date_normalizes_to_utc(client, user, make_task):
    task = make_task(user["userId"])

    body = complete(client, task["taskId"], "2024-05-01T14:00:00+02:00")

    assert body["completedDate"] == "2024-05-01T12:00:00"


def test_clearing_completed_date_requires_the_provided_flag(client, user, make_task):
    task = make_task(user["userId"])
    complete(client, task["taskId"], "2024-05-01T12:00:00")

    # Omitted: untouched
    untouched = client.patch(f"/api/tasks/{task['taskId']}", json={"description": "still done"})
    assert untouched.json()["completedDate"] == "2024-05-01T12:00:00"

    # Null without the flag: untouched
    ignored = client.patch(f"/api/tasks/{task['taskId']}", json={"completedDate": None})
    assert ignored.json()["completedDate"] == "2024-05-01T12:00:00"

    cleared = client.patch(
        f"/api/tasks/{task['taskId']}",
        json={"completedDate": None, "completedDateProvided": True},
    )
    assert cleared.status_code == 200
    assert cleared.json()["completedDate"] is None
    assert client.get(f"/api/tasks/{task['taskId']}").json()["completedDate"] is None


def test_update_missing_task_is_not_found(client):
    response = client.patch("/api/tasks/4040", json={"taskName": "Ghost"})
    assert response.status_code == 404


def test_update_rejects_empty_name(client, user, make_task):
    task = make_task(user["userId"])
    response = client.patch(f"/api/tasks/{task['taskId']}", json={"taskName": ""})
    assert response.status_code == 400


def test_delete_task_cascades_to_subtasks(client, user, make_task, make_subtask, db_session):
    task = make_task(user["userId"], "Doomed")
    subtasks = [make_subtask(task["taskId"], f"step {i}") for i in range(3)]

    response = client.post("/api/tasks/delete", json={"taskId": task["taskId"]})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": f"Task {task['taskId']} and its subtasks have been deleted successfully.",
    }
    assert client.get(f"/api/tasks/{task['taskId']}").status_code == 404
    for subtask in subtasks:
        gone = client.patch(f"/api/tasks/subtask/{subtask['subtaskId']}", json={"description": "x"})
        assert gone.status_code == 404
    assert db_session.query(Task).count() == 0
    assert db_session.query(Subtask).count() == 0


def test_delete_missing_task_is_not_found(client):
    response = client.post("/api/tasks/delete", json={"taskId": 77})
    assert response.status_code == 404
    assert response.json()["detail"] == "Task with ID 77 does not exist."


def test_delete_requires_positive_task_id(client):
    response = client.post("/api/tasks/delete", json={"taskId": 0})
    assert response.status_code == 400


def test_page_size_at_the_upper_bound_is_accepted(client, user, make_task):
    for i in range(3):
        make_task(user["userId"], f"Task {i}")

    result = list_tasks(client, user["userId"], pageNumber=1, pageSize=100)

    assert len(result["tasks"]) == 3
    assert result["pageSize"] == 100
    assert result["hasMore"] is False


@pytest.mark.parametrize("page_number", [3, 10**17])
def test_page_past_the_end_is_empty(client, user, make_task, page_number):
    for i in range(3):
        make_task(user["userId"], f"Task {i}")

    result = list_tasks(client, user["userId"], pageNumber=page_number, pageSize=100)

    assert result["tasks"] == []
    assert result["totalCount"] == 3
    assert result["pageNumber"] == page_number
    assert result["hasMore"] is False


TOO_LARGE_ID = 99999999999999999999


@pytest.mark.parametrize(
    "method, url, body",
    [
        ("get", f"/api/tasks/{TOO_LARGE_ID}", None),
        ("get", f"/api/tasks/user/{TOO_LARGE_ID}", None),
        ("patch", f"/api/tasks/{TOO_LARGE_ID}", {"taskName": "x"}),
        ("patch", f"/api/tasks/subtask/{TOO_LARGE_ID}", {"description": "x"}),
        ("post", "/api/tasks/delete", {"taskId": TOO_LARGE_ID}),
        ("post", "/api/tasks/subtask/delete", {"subtaskId": TOO_LARGE_ID}),
        ("post", "/api/tasks", {"userId": TOO_LARGE_ID, "taskName": "x"}),
        ("post", "/api/tasks/subtask", {"taskId": TOO_LARGE_ID, "description": "x"}),
    ],
)
def test_ids_beyond_the_integer_range_are_rejected(client, method, url, body):
    kwargs = {"json": body} if body is not None else {}
    response = getattr(client, method)(url, **kwargs)

    assert response.status_code == 400
    assert response.json()["title"] == "Validation error"


def test_largest_id_is_a_plain_not_found(client):
    largest = 2**63 - 1
    response = client.get(f"/api/tasks/{largest}")

    assert response.status_code == 404
    assert response.json()["detail"] == f"Task with ID {largest} does not exist."
