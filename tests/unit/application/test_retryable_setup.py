"""Tests for the retryable setup engine."""

import threading
import time
from unittest.mock import Mock

import pytest

from iaas_service.application.setup.options import SetupOptions
from iaas_service.application.setup.retryable_setup import RetryableSetup
from iaas_service.domain.base.context import OperationContext
from iaas_service.domain.base.exceptions import (
    APIError,
    MaxRetryCountExceededError,
    OperationCancelledError,
    ProvisioningError,
    SetupConfigurationError,
    SetupError,
    UnexpectedStateError,
    UpWaitError,
)


def _options(fast_options, **overrides):
    return fast_options.model_copy(update=overrides)


def _cancel_after_first_read(context, state):
    """Read function that returns ``state`` and cancels shortly after the first call."""

    def read(ctx, zone, resource_id):
        if not getattr(read, "timer", None):
            read.timer = threading.Timer(0.02, context.cancel, args=("stop",))
            read.timer.start()
        return state

    return read


@pytest.mark.unit
class TestRetryableSetupConfiguration:
    """Test collaborator validation."""

    def test_create_is_required(self):
        """Setup without a create function is rejected."""
        with pytest.raises(SetupConfigurationError, match="create"):
            RetryableSetup().setup(zone="is1a")

    @pytest.mark.parametrize("flags", [{"wait_for_copy": True}, {"wait_for_up": True}])
    def test_read_required_for_waits(self, flags):
        """A wait phase needs a read function."""
        setup = RetryableSetup(create=Mock(), delete=Mock(), **flags)

        with pytest.raises(SetupConfigurationError, match="read"):
            setup.setup(zone="is1a")

    def test_delete_required_for_copy_wait(self):
        """Copy wait needs a delete function for failed copies."""
        setup = RetryableSetup(create=Mock(), read=Mock(), wait_for_copy=True)

        with pytest.raises(SetupConfigurationError, match="delete"):
            setup.setup(zone="is1a")

    def test_no_calls_before_validation_fails(self):
        """Nothing is created when the configuration is invalid."""
        create = Mock()

        with pytest.raises(SetupConfigurationError):
            RetryableSetup(create=create, wait_for_up=True).setup(zone="is1a")

        create.assert_not_called()


@pytest.mark.unit
class TestRetryableSetupCopyRetry:
    """Test the delete-and-recreate loop."""

    def test_returns_created_resource_without_waits(self, snapshot, fast_options):
        """Without waits the created resource is returned as-is."""
        created = snapshot(availability="migrating")
        create = Mock(return_value=created)

        result = RetryableSetup(create=create, options=fast_options).setup(zone="is1a")

        assert result is created
        create.assert_called_once()
        assert create.call_args.args[1] == "is1a"

    def test_returns_copy_wait_snapshot(self, snapshot, sequence_reader, fast_options):
        """With copy wait the available snapshot is returned."""
        ready = snapshot(availability="available")
        read = sequence_reader(snapshot(availability="migrating"), ready)

        result = RetryableSetup(
            create=Mock(return_value=snapshot(availability="migrating")),
            read=read,
            delete=Mock(),
            wait_for_copy=True,
            options=fast_options,
        ).setup(zone="is1a")

        assert result is ready

    def test_failed_copy_is_deleted_and_recreated(self, snapshot, fast_options):
        """A failed copy is deleted and the next attempt succeeds."""
        create = Mock(side_effect=[snapshot("1"), snapshot("2")])
        states = {"1": snapshot("1", "failed"), "2": snapshot("2", "available")}
        read = Mock(side_effect=lambda ctx, zone, resource_id: states[resource_id])
        delete = Mock()

        result = RetryableSetup(
            create=create,
            read=read,
            delete=delete,
            wait_for_copy=True,
            options=fast_options,
        ).setup(zone="is1a")

        assert result.id == "2"
        assert create.call_count == 2
        delete.assert_called_once()
        assert delete.call_args.args[1:] == ("is1a", "1")

    def test_retry_budget_exhausted(self, snapshot, fast_options):
        """retry_count=2 allows three creates, each failed one is deleted once."""
        create = Mock(side_effect=[snapshot("1"), snapshot("2"), snapshot("3")])
        read = Mock(side_effect=lambda ctx, zone, resource_id: snapshot(resource_id, "failed"))
        delete = Mock()

        with pytest.raises(MaxRetryCountExceededError) as exc_info:
            RetryableSetup(
                create=create,
                read=read,
                delete=delete,
                wait_for_copy=True,
                options=_options(fast_options, retry_count=2, delete_retry_count=1),
            ).setup(zone="is1a")

        assert exc_info.value.attempts == 3
        assert create.call_count == 3
        assert delete.call_count == 3
        assert "3 attempts" in str(exc_info.value)

    def test_two_failed_copies_then_success(self, snapshot, fast_options):
        """retry_count=2: two failed copies are deleted and the third succeeds."""
        create = Mock(side_effect=[snapshot("1"), snapshot("2"), snapshot("3")])
        states = {
            "1": snapshot("1", "failed"),
            "2": snapshot("2", "failed"),
            "3": snapshot("3", "available"),
        }
        read = Mock(side_effect=lambda ctx, zone, resource_id: states[resource_id])
        delete = Mock()

        result = RetryableSetup(
            create=create,
            read=read,
            delete=delete,
            wait_for_copy=True,
            options=_options(fast_options, retry_count=2, delete_retry_count=1),
        ).setup(zone="is1a")

        assert create.call_count == 3
        assert delete.call_count == 2
        assert result.availability == "available"

    def test_delete_failure_retried_then_gives_up(self, snapshot, fast_options):
        """Delete is retried delete_retry_count times and never raises."""
        create = Mock(side_effect=[snapshot("1"), snapshot("2")])
        states = {"1": snapshot("1", "failed"), "2": snapshot("2", "available")}
        read = Mock(side_effect=lambda ctx, zone, resource_id: states[resource_id])
        delete = Mock(side_effect=APIError("busy", status_code=409))

        result = RetryableSetup(
            create=create,
            read=read,
            delete=delete,
            wait_for_copy=True,
            options=_options(fast_options, delete_retry_count=3),
        ).setup(zone="is1a")

        assert result.id == "2"
        assert delete.call_count == 3

    def test_delete_stops_at_first_success(self, snapshot, fast_options):
        """Successful delete ends the delete retries."""
        create = Mock(side_effect=[snapshot("1"), snapshot("2")])
        states = {"1": snapshot("1", "failed"), "2": snapshot("2", "available")}
        read = Mock(side_effect=lambda ctx, zone, resource_id: states[resource_id])
        delete = Mock(side_effect=[APIError("busy"), None])

        RetryableSetup(
            create=create,
            read=read,
            delete=delete,
            wait_for_copy=True,
            options=_options(fast_options, delete_retry_count=5),
        ).setup(zone="is1a")

        assert delete.call_count == 2

    def test_zero_retry_count_allows_single_attempt(self, snapshot, fast_options):
        """retry_count=0 gives exactly one attempt."""
        create = Mock(return_value=snapshot("1"))

        with pytest.raises(MaxRetryCountExceededError) as exc_info:
            RetryableSetup(
                create=create,
                read=Mock(return_value=snapshot("1", "failed")),
                delete=Mock(),
                wait_for_copy=True,
                options=_options(fast_options, retry_count=0),
            ).setup(zone="is1a")

        assert exc_info.value.attempts == 1
        create.assert_called_once()

    def test_create_error_propagates(self, fast_options):
        """Create failures are not retried."""
        error = APIError("quota exceeded")
        create = Mock(side_effect=error)

        with pytest.raises(APIError) as exc_info:
            RetryableSetup(create=create, options=fast_options).setup(zone="is1a")

        assert exc_info.value is error
        create.assert_called_once()

    def test_create_returning_none_raises(self, fast_options):
        """A create function that returns nothing is an error."""
        with pytest.raises(SetupError):
            RetryableSetup(create=Mock(return_value=None), options=fast_options).setup()

    def test_copy_wait_error_propagates(self, snapshot, fast_options):
        """An unexpected state during copy ends setup without retrying."""
        create = Mock(return_value=snapshot("1"))

        with pytest.raises(UnexpectedStateError):
            RetryableSetup(
                create=create,
                read=Mock(return_value=snapshot("1", availability=None)),
                delete=Mock(),
                wait_for_copy=True,
                options=fast_options,
            ).setup(zone="is1a")

        create.assert_called_once()

    def test_no_copy_wait_never_deletes(self, snapshot, fast_options):
        """Without copy wait the resource is created once and never deleted."""
        create = Mock(return_value=snapshot("1", "failed"))
        delete = Mock()

        RetryableSetup(
            create=create, read=Mock(), delete=delete, options=fast_options
        ).setup(zone="is1a")

        create.assert_called_once()
        delete.assert_not_called()

    def test_available_on_first_copy_poll(self, snapshot, fast_options):
        """An available first poll returns that snapshot without deleting anything."""
        ready = snapshot("1", "available")
        read = Mock(return_value=ready)
        delete = Mock()

        result = RetryableSetup(
            create=Mock(return_value=snapshot("1", "migrating")),
            read=read,
            delete=delete,
            wait_for_copy=True,
            options=fast_options,
        ).setup(zone="is1a")

        assert result is ready
        read.assert_called_once()
        delete.assert_not_called()

    def test_cancel_during_copy_read_skips_provisioning(self, snapshot, fast_options):
        """A cancel landing during the copy read stops setup before provisioning."""
        context = OperationContext()
        created = snapshot("1", "migrating")
        hook = Mock()

        def read(ctx, zone, resource_id):
            context.cancel("stop")
            return snapshot("1", "available")

        with pytest.raises(OperationCancelledError) as exc_info:
            RetryableSetup(
                create=Mock(return_value=created),
                read=read,
                delete=Mock(),
                provision_before_up=hook,
                wait_for_copy=True,
                options=fast_options,
            ).setup(context, "is1a")

        hook.assert_not_called()
        assert exc_info.value.resource is created

    def test_cancel_during_copy_wait_stops_reads(self, snapshot, fast_options):
        """Cancelling between copy polls ends setup within one interval with no more reads."""
        context = OperationContext()
        read = Mock(side_effect=_cancel_after_first_read(context, snapshot("1", "migrating")))
        delete = Mock()

        started = time.monotonic()
        with pytest.raises(OperationCancelledError):
            RetryableSetup(
                create=Mock(return_value=snapshot("1", "migrating")),
                read=read,
                delete=delete,
                wait_for_copy=True,
                options=_options(fast_options, polling_interval=2, polling_timeout=30),
            ).setup(context, "is1a")

        assert time.monotonic() - started < 2
        calls = read.call_count
        time.sleep(0.05)
        assert read.call_count == calls == 1
        delete.assert_not_called()

    def test_cancelled_context_creates_nothing(self, fast_options):
        """A cancelled context stops before the first create."""
        context = OperationContext()
        context.cancel()
        create = Mock()

        with pytest.raises(OperationCancelledError):
            RetryableSetup(create=create, options=fast_options).setup(context, "is1a")

        create.assert_not_called()


@pytest.mark.unit
class TestRetryableSetupProvisioning:
    """Test the provision-before-up hook."""

    def test_hook_receives_created_resource(self, snapshot, fast_options):
        """The hook runs once with the zone, id and created snapshot."""
        created = snapshot("7")
        hook = Mock()

        RetryableSetup(
            create=Mock(return_value=created),
            provision_before_up=hook,
            options=fast_options,
        ).setup(zone="is1a")

        hook.assert_called_once()
        assert hook.call_args.args[1:] == ("is1a", "7", created)

    def test_hook_retried_until_success(self, snapshot, fast_options):
        """A hook that eventually succeeds lets setup finish."""
        hook = Mock(side_effect=[APIError("a"), APIError("b"), None])

        RetryableSetup(
            create=Mock(return_value=snapshot("7")),
            provision_before_up=hook,
            options=_options(fast_options, provisioning_retry_count=3),
        ).setup(zone="is1a")

        assert hook.call_count == 3

    def test_hook_exhaustion_raises_with_resource(self, snapshot, fast_options):
        """Exhausted provisioning raises carrying the resource and the last error."""
        created = snapshot("7")
        last = APIError("still failing")
        hook = Mock(side_effect=[APIError("first"), last])

        with pytest.raises(ProvisioningError) as exc_info:
            RetryableSetup(
                create=Mock(return_value=created),
                provision_before_up=hook,
                options=_options(fast_options, provisioning_retry_count=2),
            ).setup(zone="is1a")

        assert hook.call_count == 2
        assert exc_info.value.resource is created
        assert exc_info.value.__cause__ is last

    def test_hook_cancellation_is_not_retried(self, snapshot, fast_options):
        """Cancellation inside the hook is raised with the resource."""
        created = snapshot("7")
        hook = Mock(side_effect=OperationCancelledError("cancelled"))

        with pytest.raises(OperationCancelledError) as exc_info:
            RetryableSetup(
                create=Mock(return_value=created),
                provision_before_up=hook,
                options=fast_options,
            ).setup(zone="is1a")

        hook.assert_called_once()
        assert exc_info.value.resource is created


@pytest.mark.unit
class TestRetryableSetupUpWait:
    """Test the boot wait phase."""

    def test_waits_until_up(self, snapshot, sequence_reader, fast_options):
        """The up wait polls until the resource is up."""
        created = snapshot("7", instance_status="down")
        read = sequence_reader(
            snapshot("7", instance_status="down"),
            snapshot("7", instance_status="up"),
        )

        result = RetryableSetup(
            create=Mock(return_value=created),
            read=read,
            wait_for_up=True,
            options=fast_options,
        ).setup(zone="is1a")

        assert result is created
        assert read.calls == 2

    def test_cancel_during_up_wait_stops_reads(self, snapshot, fast_options):
        """Cancelling between boot polls raises cancellation with the resource."""
        context = OperationContext()
        created = snapshot("7")
        pending = snapshot("7", instance_status="down")
        read = Mock(side_effect=_cancel_after_first_read(context, pending))

        started = time.monotonic()
        with pytest.raises(OperationCancelledError) as exc_info:
            RetryableSetup(
                create=Mock(return_value=created),
                read=read,
                wait_for_up=True,
                options=_options(fast_options, polling_interval=2, polling_timeout=30),
            ).setup(context, "is1a")

        assert time.monotonic() - started < 2
        assert exc_info.value.resource is created
        time.sleep(0.05)
        assert read.call_count == 1

    def test_cancel_in_hook_skips_up_wait(self, snapshot, fast_options):
        """A context cancelled by the time provisioning returns stops before the boot wait."""
        context = OperationContext()
        created = snapshot("7")
        read = Mock()

        with pytest.raises(OperationCancelledError) as exc_info:
            RetryableSetup(
                create=Mock(return_value=created),
                read=read,
                provision_before_up=lambda ctx, zone, resource_id, resource: context.cancel(),
                wait_for_up=True,
                options=fast_options,
            ).setup(context, "is1a")

        read.assert_not_called()
        assert exc_info.value.resource is created

    def test_up_wait_failure_carries_resource(self, snapshot, fast_options):
        """A failed up wait raises UpWaitError with the resource."""
        created = snapshot("7")
        read_error = APIError("read failed")

        with pytest.raises(UpWaitError) as exc_info:
            RetryableSetup(
                create=Mock(return_value=created),
                read=Mock(side_effect=read_error),
                wait_for_up=True,
                options=fast_options,
            ).setup(zone="is1a")

        assert exc_info.value.resource is created
        assert exc_info.value.__cause__ is read_error

    def test_failed_during_up_wait_is_not_retried(self, snapshot, fast_options):
        """Failed availability during the up wait is an error, not a retry."""
        create = Mock(return_value=snapshot("7"))
        read = Mock(return_value=snapshot("7", "failed", instance_status="down"))

        with pytest.raises(UpWaitError):
            RetryableSetup(
                create=create,
                read=read,
                wait_for_up=True,
                options=fast_options,
            ).setup(zone="is1a")

        create.assert_called_once()

    def test_up_wait_timeout(self, snapshot, fast_options):
        """A resource that never boots times out inside UpWaitError."""
        with pytest.raises(UpWaitError) as exc_info:
            RetryableSetup(
                create=Mock(return_value=snapshot("7")),
                read=Mock(return_value=snapshot("7", instance_status="down")),
                wait_for_up=True,
                options=_options(fast_options, polling_timeout=0.05),
            ).setup(zone="is1a")

        assert isinstance(exc_info.value.__cause__, TimeoutError)

    def test_options_default_when_missing(self, snapshot):
        """Setup runs with default options when none are given."""
        created = snapshot("7")

        assert RetryableSetup(create=Mock(return_value=created)).setup() is created


@pytest.mark.unit
class TestSetupOptions:
    """Test SetupOptions defaults and bounds."""

    def test_defaults(self):
        """Defaults match the documented policy."""
        options = SetupOptions()

        assert options.retry_count == 3
        assert options.polling_timeout == 1200
        assert options.delete_retry_count == 10
        assert options.provisioning_retry_count == 10
        assert options.boot_after_build is False

    def test_negative_retry_count_rejected(self):
        """Negative retry counts do not validate."""
        with pytest.raises(ValueError):
            SetupOptions(retry_count=-1)
