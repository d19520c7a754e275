from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Tuple


class FieldKind(str, Enum):
    TEXT = "text"
    SELECT = "select"
    EMAIL = "email"
    PASSWORD_CONFIRM = "password_confirm"
    STATIC_LABEL = "static_label"
    SUBMIT = "submit"


@dataclass(frozen=True)
class FieldGroup:
    """タブ（details）でまとめて表示するフィールドのグループ。"""
    name: str
    label: str
    description: str = ""


@dataclass(frozen=True)
class FieldDefinition:
    """
    フォーム上の入力項目1つ分の定義。
    描画側（forms/simple_form.py）はこの定義の並び順どおりにフィールドを組み立てる。
    """
    name: str
    kind: FieldKind
    label: str = ""
    required: bool = False
    # select 用: 値 -> 表示ラベル（順序を保持）
    options: Mapping[Any, str] = field(default_factory=dict)
    default_value: Optional[Any] = None
    description: str = ""
    group: Optional[str] = None
    size: Optional[int] = None
    css_classes: Tuple[str, ...] = ()
    # static_label 用の本文（HTML）
    markup: str = ""

    @property
    def is_input(self) -> bool:
        return self.kind not in (FieldKind.STATIC_LABEL, FieldKind.SUBMIT)
