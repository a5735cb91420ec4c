"""Tests for task endpoints with mocked services."""

import uuid

from lockedin.api.deps.dependencies import get_task_service
from lockedin.core.exceptions import NotFoundError


def _use(client, service) -> None:
    client.app.dependency_overrides[get_task_service] = lambda: service


def test_create_task(client, mock_service, task_factory) -> None:
    mock_service.create.return_value = task_factory(priority=2)
    _use(client, mock_service)

    response = client.post("/api/v1/tasks", json={"title": "Essay", "priority": 2})

    assert response.status_code == 201
    assert response.json()["priority"] == 2
    kwargs = mock_service.create.call_args.kwargs
    assert kwargs["title"] == "Essay"
    assert kwargs["order_index"] == 0


def test_create_task_priority_out_of_range(client, mock_service) -> None:
    _use(client, mock_service)

    response = client.post("/api/v1/tasks", json={"title": "Essay", "priority": 7})

    assert response.status_code == 422
    mock_service.create.assert_not_awaited()


def test_list_tasks_with_filters(client, mock_service, task_factory) -> None:
    mock_service.list_tasks.return_value = [task_factory()]
    _use(client, mock_service)
    session_id = uuid.uuid4()

    response = client.get("/api/v1/tasks", params={"completed": "false", "session_id": str(session_id)})

    assert response.status_code == 200
    assert mock_service.list_tasks.call_args.kwargs == {
        "completed": False,
        "session_id": session_id,
        "limit": None,
    }


def test_reorder(client, mock_service, task_factory) -> None:
    first, second = uuid.uuid4(), uuid.uuid4()
    mock_service.reorder.return_value = [task_factory(id=first, order_index=1), task_factory(id=second)]
    _use(client, mock_service)

    response = client.put(
        "/api/v1/tasks/reorder",
        json={"tasks": [{"id": str(first), "order_index": 1}, {"id": str(second), "order_index": 0}]},
    )

    assert response.status_code == 200
    mock_service.reorder.assert_awaited_once_with([(first, 1), (second, 0)])


def test_toggle(client, mock_service, task_factory) -> None:
    mock_service.toggle_completion.return_value = task_factory(is_completed=True)
    _use(client, mock_service)

    response = client.post(f"/api/v1/tasks/{uuid.uuid4()}/toggle")

    assert response.json()["is_completed"] is True


def test_update_partial(client, mock_service, task_factory) -> None:
    mock_service.update.return_value = task_factory(title="New")
    _use(client, mock_service)
    task_id = uuid.uuid4()

    response = client.patch(f"/api/v1/tasks/{task_id}", json={"title": "New"})

    assert response.status_code == 200
    mock_service.update.assert_awaited_once_with(task_id, {"title": "New"})


def test_foreign_task_is_404(client, mock_service) -> None:
    task_id = uuid.uuid4()
    mock_service.delete.side_effect = NotFoundError("task", task_id)
    _use(client, mock_service)

    response = client.delete(f"/api/v1/tasks/{task_id}")

    assert response.status_code == 404
