import inspect
import time
from datetime import datetime, timezone
from functools import wraps

import polars as pl


def log_mutation(fn):
    """
    Record successful calls of a mutating method in the instance's history.

    Applied once at class level, so copies and unpickled graphs log into their
    own history. Whether to record is decided at call time.
    """
    op = fn.__name__
    sig = inspect.signature(fn)

    @wraps(fn)
    def wrapper(self, *args, **kwargs):
        # exceptions propagate before anything is recorded
        result = fn(self, *args, **kwargs)
        if self._history_enabled:
            bound = sig.bind(self, *args, **kwargs)
            bound.apply_defaults()
            payload = {k: v for k, v in bound.arguments.items() if k != "self"}
            payload["result"] = result
            self._log_event(op, **payload)
        return result
    return wrapper


class HistoryMixin:
    """
    Append-only, in-memory record of successful mutations.

    Classes using the mixin call :meth:`_init_history` from ``__init__`` and
    decorate their mutating methods with :func:`log_mutation`.
    """

    def _init_history(self, enabled=True):
        self._history_enabled = bool(enabled)
        self._history = []           # list[dict]
        self._history_version = 0
        self._history_clock0 = time.perf_counter_ns()

    def _utcnow_iso(self):
        return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")

    def _jsonify(self, x):
        # Make args/return JSON-safe & compact.
        if x is None or isinstance(x, (bool, int, float, str)):
            return x
        if isinstance(x, (set, frozenset)):
            return sorted((self._jsonify(v) for v in x), key=repr)
        if isinstance(x, (list, tuple)):
            return [self._jsonify(v) for v in x]
        if isinstance(x, dict):
            return {str(k): self._jsonify(v) for k, v in x.items()}
        return repr(x)

    def _log_event(self, op: str, **fields):
        if not self._history_enabled:
            return
        self._history_version += 1
        evt = {
            "version": self._history_version,
            "ts_utc": self._utcnow_iso(),                    # ISO-8601 with Z
            "mono_ns": time.perf_counter_ns() - self._history_clock0,
            "op": op,
        }
        for k, v in fields.items():
            evt[k] = self._jsonify(v)
        self._history.append(evt)

    def history(self, as_df: bool = False):
        """
        Return the mutation history.

        Parameters
        ----------
        as_df : bool, default False
            If True, return a Polars DF [DataFrame]; otherwise a list of dicts.

        Returns
        -------
        list[dict] or polars.DataFrame
            Each event includes 'version', 'ts_utc' (ISO-8601, UTC), 'mono_ns'
            (monotonic nanoseconds since the graph was created), 'op', the call
            arguments and 'result'.

        Notes
        -----
        Only calls that returned normally are recorded. Ordering is guaranteed
        by 'version' and 'mono_ns'.
        """
        if not as_df:
            return list(self._history)
        if not self._history:
            return pl.DataFrame(schema={"version": pl.Int64, "ts_utc": pl.Utf8,
                                        "mono_ns": pl.Int64, "op": pl.Utf8})
        return pl.DataFrame(self._history, infer_schema_length=None, strict=False)

    def enable_history(self, flag: bool = True):
        """
        Enable or disable in-memory mutation logging.

        Parameters
        ----------
        flag : bool, default True
            When True, start/continue logging; when False, pause logging.
        """
        self._history_enabled = bool(flag)

    def clear_history(self):
        """Clear the in-memory mutation log. Version numbers keep increasing."""
        self._history.clear()

    def mark(self, label: str):
        """
        Insert a manual marker into the mutation history.

        Parameters
        ----------
        label : str
            Human-readable tag for the marker event.

        Notes
        -----
        The event is recorded with 'op'='mark'. Logging must be enabled for the
        marker to be recorded.
        """
        self._log_event("mark", label=label)
