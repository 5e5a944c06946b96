"""multipart/form-data 表单构造器。

每次请求创建一个新的 ``MultipartForm``, 显式传给传输层, 不存在进程级共享状态。
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

FormFile = tuple[str, tuple[str, bytes, str]]
"""httpx ``files`` 参数的单个条目: (字段名, (文件名, 内容, MIME 类型))。"""


@dataclass
class FormFileField:
    """表单中的一个文件字段。"""

    name: str
    filename: str
    content: bytes
    mime_type: str = "application/octet-stream"


@dataclass
class MultipartForm:
    """请求专用的 multipart 表单。

    Attributes:
        fields: 按添加顺序保存的普通字段。
        files: 按添加顺序保存的文件字段。
    """

    fields: list[tuple[str, str]] = field(default_factory=list)
    files: list[FormFileField] = field(default_factory=list)

    def add_field(self, name: str, value: Any) -> MultipartForm:
        """添加普通字段, 返回 self 便于链式调用。"""
        self.fields.append((name, value if isinstance(value, str) else str(value)))
        return self

    def add_models(self, models: Iterable[str]) -> MultipartForm:
        """按 ``models[0]``, ``models[1]`` ... 的形式逐个添加模型。"""
        for index, model in enumerate(models):
            self.add_field(f"models[{index}]", model)
        return self

    def add_json_field(self, name: str, value: Mapping[str, Any]) -> MultipartForm:
        """以 JSON 字符串形式添加字段。"""
        return self.add_field(name, json.dumps(dict(value)))

    def add_file(
        self,
        name: str,
        content: bytes,
        filename: str,
        mime_type: str = "application/octet-stream",
    ) -> MultipartForm:
        """添加文件字段。"""
        self.files.append(
            FormFileField(
                name=name,
                filename=filename,
                content=content,
                mime_type=mime_type,
            )
        )
        return self

    def field_names(self) -> list[str]:
        """所有字段名(普通字段在前)。"""
        return [name for name, _ in self.fields] + [f.name for f in self.files]

    def get_field(self, name: str) -> str | None:
        """返回第一个同名普通字段的值。"""
        for field_name, value in self.fields:
            if field_name == name:
                return value
        return None

    def encode(self) -> tuple[dict[str, str | list[str]], list[FormFile]]:
        """转换为 httpx 的 ``data`` 与 ``files`` 参数。

        Returns:
            tuple: (data, files)。同名普通字段合并为列表。
        """
        data: dict[str, str | list[str]] = {}
        for name, value in self.fields:
            existing = data.get(name)
            if existing is None:
                data[name] = value
            elif isinstance(existing, list):
                existing.append(value)
            else:
                data[name] = [existing, value]

        files: list[FormFile] = [
            (f.name, (f.filename, f.content, f.mime_type)) for f in self.files
        ]
        return data, files
