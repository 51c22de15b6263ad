"""Tests for the named-request dispatcher."""

import json

import pytest

from task_registry.core.errors import DispatchError
from task_registry.dispatcher import OperationKind, RequestDispatcher, encode_result


pytestmark = pytest.mark.integration


@pytest.fixture
def dispatcher(service):
    """Dispatcher over the deterministic service."""
    return RequestDispatcher(service)


def task_args(title="A", description="d", completed=False):
    return [{"title": title, "description": description, "completed": completed}]


class TestOperationTable:
    """Test the advertised operations."""

    def test_operation_names_and_kinds(self, dispatcher):
        """Test every registry operation is exposed with its kind."""
        assert dispatcher.operations() == {
            "getTasks": OperationKind.QUERY,
            "getTask": OperationKind.QUERY,
            "addTask": OperationKind.UPDATE,
            "updateTask": OperationKind.UPDATE,
            "completeTask": OperationKind.UPDATE,
            "deleteTask": OperationKind.UPDATE,
            "listCompletedTasks": OperationKind.QUERY,
            "listIncompleteTasks": OperationKind.QUERY,
            "countTotalTasks": OperationKind.QUERY,
            "archiveCompletedTasks": OperationKind.UPDATE,
            "clearAllTasks": OperationKind.UPDATE,
        }


class TestDispatch:
    """Test request routing and result envelopes."""

    def test_lifecycle_example(self, dispatcher, clock):
        """Test add, complete, delete, get through the request surface."""
        added = dispatcher.dispatch("addTask", task_args())["Ok"]
        assert added == {
            "id": "task-1",
            "title": "A",
            "description": "d",
            "completed": False,
            "createdAt": clock.readings[0],
            "updatedAt": None,
        }

        completed = dispatcher.dispatch("completeTask", ["task-1"])["Ok"]
        assert completed["completed"] is True
        assert completed["updatedAt"] == clock.readings[1]

        deleted = dispatcher.dispatch("deleteTask", ["task-1"])
        assert deleted == {"Ok": completed}

        assert dispatcher.dispatch("getTask", ["task-1"]) == {
            "Err": "Task with ID task-1 not found"
        }

    def test_update_task(self, dispatcher):
        """Test update with an id and a payload argument."""
        dispatcher.dispatch("addTask", task_args())

        response = dispatcher.dispatch("updateTask", ["task-1", *task_args("B", "e", True)])

        assert response["Ok"]["title"] == "B"
        assert response["Ok"]["completed"] is True

    def test_not_found_envelopes(self, dispatcher):
        """Test every id-addressed operation reports NotFound as Err."""
        for name, args in [
            ("getTask", ["X"]),
            ("completeTask", ["X"]),
            ("deleteTask", ["X"]),
            ("updateTask", ["X", *task_args()]),
        ]:
            assert dispatcher.dispatch(name, args) == {"Err": "Task with ID X not found"}

    def test_collection_operations(self, dispatcher):
        """Test listings, count, archive and clear."""
        dispatcher.dispatch("addTask", task_args("A"))
        dispatcher.dispatch("addTask", task_args("B", completed=True))

        assert len(dispatcher.dispatch("getTasks")["Ok"]) == 2
        assert [t["title"] for t in dispatcher.dispatch("listCompletedTasks")["Ok"]] == ["B"]
        assert [t["title"] for t in dispatcher.dispatch("listIncompleteTasks")["Ok"]] == ["A"]
        assert dispatcher.dispatch("countTotalTasks") == {"Ok": 2}

        archived = dispatcher.dispatch("archiveCompletedTasks")["Ok"]
        assert [t["title"] for t in archived] == ["B"]
        assert dispatcher.dispatch("countTotalTasks") == {"Ok": 1}

        assert dispatcher.dispatch("clearAllTasks") == {"Ok": "All tasks cleared"}
        assert dispatcher.dispatch("countTotalTasks") == {"Ok": 0}


class TestDispatchErrors:
    """Test boundary validation."""

    def test_unknown_operation(self, dispatcher):
        """Test that unknown names are rejected."""
        with pytest.raises(DispatchError, match="unknown operation"):
            dispatcher.dispatch("dropTables")

    def test_wrong_arity(self, dispatcher):
        """Test argument count checks."""
        with pytest.raises(DispatchError, match="expected 1 argument"):
            dispatcher.dispatch("getTask", [])

    def test_invalid_payload(self, dispatcher, service):
        """Test payload validation wraps the pydantic error."""
        with pytest.raises(DispatchError, match="invalid arguments") as exc:
            dispatcher.dispatch("addTask", [{"title": "A"}])

        assert exc.value.cause is not None
        assert service.count_total_tasks() == 0

    def test_non_string_id(self, dispatcher):
        """Test ids must be strings."""
        with pytest.raises(DispatchError):
            dispatcher.dispatch("getTask", [42])


class TestDispatchJson:
    """Test the JSON-in, JSON-out entry point."""

    def test_round_trip(self, dispatcher):
        """Test JSON arguments and response."""
        raw = dispatcher.dispatch_json("addTask", json.dumps(task_args()))

        assert json.loads(raw)["Ok"]["id"] == "task-1"
        assert json.loads(dispatcher.dispatch_json("countTotalTasks")) == {"Ok": 1}

    def test_malformed_json(self, dispatcher):
        """Test that unparsable arguments are rejected."""
        with pytest.raises(DispatchError, match="not valid JSON"):
            dispatcher.dispatch_json("getTasks", "[")

    def test_arguments_must_be_array(self, dispatcher):
        """Test that arguments must be a JSON array."""
        with pytest.raises(DispatchError, match="must be a JSON array"):
            dispatcher.dispatch_json("getTask", '{"id": "x"}')


def test_encode_result_passthrough():
    """Test that plain values are returned unchanged."""
    assert encode_result(3) == 3
    assert encode_result("All tasks cleared") == "All tasks cleared"
    assert encode_result([]) == []
