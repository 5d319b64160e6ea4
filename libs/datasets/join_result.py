import dataclasses
from typing import Optional

import pandas as pd
import structlog

from commondata.common_fields import CommonFields
from commondata.common_fields import FieldName


_log = structlog.get_logger()


class UnmatchedJoinKeysError(ValueError):
    """Raised when a join that is required to be complete leaves rows without a partner."""


class EmptyJoinError(ValueError):
    """Raised when a join does not match a single row."""


@dataclasses.dataclass(frozen=True)
class JoinResult:
    """The outcome of an inner join, keeping the rows that did not find a partner.

    Callers decide what to do with `left_only` and `right_only` by calling `ignore_unmatched`
    (the exclusions are counted and logged) or `raise_if_unmatched`.
    """

    # Name of the join, used in log messages and errors.
    name: str

    key: FieldName

    matched: pd.DataFrame

    # Rows of the left input whose key is not in the right input.
    left_only: pd.DataFrame

    # Rows of the right input whose key is not in the left input.
    right_only: pd.DataFrame

    @property
    def left_only_keys(self):
        return sorted(self.left_only[self.key].dropna().unique().tolist())

    @property
    def right_only_keys(self):
        return sorted(self.right_only[self.key].dropna().unique().tolist())

    @property
    def has_unmatched(self) -> bool:
        return not (self.left_only.empty and self.right_only.empty)

    def ignore_unmatched(self, log=None) -> pd.DataFrame:
        """Returns the matched rows after logging what was excluded from each side."""
        log = log or _log
        if self.has_unmatched:
            log.warning(
                "Join excluded rows without a matching key",
                join=self.name,
                left_only_rows=len(self.left_only),
                left_only_keys=self.left_only_keys,
                right_only_rows=len(self.right_only),
                right_only_keys=self.right_only_keys,
            )
        return self.matched

    def raise_if_unmatched(self) -> pd.DataFrame:
        """Returns the matched rows, raising UnmatchedJoinKeysError if any row was excluded."""
        if self.has_unmatched:
            raise UnmatchedJoinKeysError(
                f"{self.name}: left only {self.left_only_keys}, right only {self.right_only_keys}"
            )
        return self.matched

    def resolve(self, strict: bool, log=None) -> pd.DataFrame:
        if strict:
            return self.raise_if_unmatched()
        return self.ignore_unmatched(log=log)


def inner_join(
    left: pd.DataFrame,
    right: pd.DataFrame,
    *,
    name: str,
    key: FieldName = CommonFields.STATE,
    validate: Optional[str] = None,
) -> JoinResult:
    """Joins `left` and `right` on the exact value of column `key`.

    Args:
        left: DataFrame with column `key`
        right: DataFrame with column `key`
        name: describes the join in logs and errors
        key: the column to join on
        validate: passed to `pd.merge`, for example "one_to_one"

    Raises:
        EmptyJoinError: when no row of `left` matches a row of `right`.
    """
    matched = left.merge(right, on=key, how="inner", validate=validate)
    if matched.empty:
        raise EmptyJoinError(f"{name}: no rows matched on {key}")
    left_only = left.loc[~left[key].isin(right[key])]
    right_only = right.loc[~right[key].isin(left[key])]
    return JoinResult(
        name=name, key=key, matched=matched, left_only=left_only, right_only=right_only
    )
