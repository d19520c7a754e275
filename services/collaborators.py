# services/collaborators.py
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Protocol

from email_validator import EmailNotValidError, validate_email
from flask_login import current_user
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models.submissions import Submissions


logger = logging.getLogger(__name__)


class DatastoreError(Exception):
    """保存処理（接続・制約違反など）に失敗したときに送出する。"""


class Datastore(Protocol):
    def insert(self, table: str, record: Mapping[str, Any]) -> int: ...


class CurrentUserProvider(Protocol):
    def get_user_id(self) -> int: ...

    def get_account_name(self) -> str: ...


class EmailFormatValidator(Protocol):
    def is_valid(self, value: str) -> bool: ...


class SqlAlchemyDatastore(object):
    """
    Flask-SQLAlchemy のセッション経由で1行だけ INSERT する。
    - 成功時は commit して採番された主キーを返す
    - 失敗時は rollback してから DatastoreError を送出する（リトライはしない）
    """

    MODELS: Dict[str, Any] = {
        Submissions.__tablename__: Submissions,
    }

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def insert(self, table: str, record: Mapping[str, Any]) -> int:
        model = self.MODELS.get(table)
        if model is None:
            raise DatastoreError(f"unknown table: {table}")

        row = model(**record)
        try:
            self.session.add(row)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("insert into %s failed: %s", table, e)
            raise DatastoreError(f"insert into {table} failed") from e
        return row.id


class FlaskLoginUserProvider(object):
    """flask_login の current_user をそのまま参照する。未ログインは uid=0 扱い。"""

    def get_user_id(self) -> int:
        if current_user.is_authenticated:
            return int(current_user.user_id)
        return 0

    def get_account_name(self) -> str:
        if current_user.is_authenticated:
            return current_user.username
        return ""


class EmailSyntaxValidator(object):
    """構文チェックのみ（DNS による到達性チェックは行わない）。"""

    def is_valid(self, value: str) -> bool:
        if not value:
            return False
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return False
        return True
