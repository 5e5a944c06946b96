"""请求校验 - 在发送前检查请求结构。

所有函数都是纯函数: 不做 I/O, 不修改输入, 遇到第一个违规立即抛出
``ValidationError``。检查顺序固定: 先必填字段(``models`` 优先), 再可选字段;
``messages`` 中按顺序逐条检查, 每条内按 system, user, assistants 检查。
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from .error import ValidationError
from .types import CONTENT_TYPES

MESSAGE_KEYS: tuple[str, ...] = ("system", "user", "assistants")

MODELS_REQUIRED = "models must be a non-empty array of strings"
MODELS_NOT_STRINGS = "all elements in models must be strings"

_CONTENT_TYPES_TEXT = ", ".join(CONTENT_TYPES)


# ---------------------------------------------------------------------------
# 基础类型判断
# ---------------------------------------------------------------------------


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_number(value: Any) -> bool:
    # bool 是 int 的子类, 不算数字
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def _is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def _is_numeric_text(text: str) -> bool:
    if not text.strip():
        return False
    try:
        number = float(text)
    except ValueError:
        return False
    return not math.isnan(number)


def _is_pair(value: Any, separator: str) -> bool:
    if not isinstance(value, str):
        return False
    parts = value.split(separator)
    return len(parts) == 2 and all(_is_numeric_text(part) for part in parts)


def _present(request: Mapping[str, Any], key: str) -> bool:
    """可选字段是否提供(None 视为未提供)。"""
    return request.get(key) is not None


# ---------------------------------------------------------------------------
# 共享检查
# ---------------------------------------------------------------------------


def validate_request_object(request: Any) -> None:
    """请求本身必须是映射。"""
    if not isinstance(request, Mapping):
        raise ValidationError("request must be an object")


def validate_models(models: Any, *, single_model_operation: str | None = None) -> None:
    """校验模型列表。

    Args:
        models: 模型标识列表。
        single_model_operation: 只支持单模型的操作名称(如 "text-to-speech"),
            为 None 时不限制数量。

    Raises:
        ValidationError: 列表为空、不是数组、含非字符串元素或超出单模型限制。
    """
    if not _is_array(models) or len(models) == 0:
        raise ValidationError(MODELS_REQUIRED)

    if not all(isinstance(model, str) for model in models):
        raise ValidationError(MODELS_NOT_STRINGS)

    if single_model_operation and len(models) > 1:
        raise ValidationError(
            f"Only one model is supported for {single_model_operation} "
            "processing at this time"
        )


def validate_non_empty_string(value: Any, name: str) -> None:
    """字段必须是去除空白后非空的字符串。"""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} must be a non-empty string")


def validate_prompt(prompt: Any) -> None:
    """校验提示词。"""
    validate_non_empty_string(prompt, "prompt")


def validate_content_object(content: Any, path: str) -> None:
    """校验单个内容块。

    Args:
        content: 内容块。
        path: 用于错误消息的位置描述, 如 ``user[0]``。

    Raises:
        ValidationError: 缺少 ``type`` 或 ``type`` 不在允许范围内。
    """
    if not isinstance(content, Mapping) or "type" not in content:
        raise ValidationError(f"{path} must be an object with a 'type' property")

    if content["type"] not in CONTENT_TYPES:
        raise ValidationError(f"{path}.type must be one of: {_CONTENT_TYPES_TEXT}")


def _validate_message_content(entry: Mapping[str, Any]) -> None:
    for key in ("system", "user"):
        contents = entry.get(key)
        if not contents:
            continue
        if not _is_array(contents):
            raise ValidationError(f"{key} must be an array of content objects")
        for i, content in enumerate(contents):
            validate_content_object(content, f"{key}[{i}]")

    assistants = entry.get("assistants")
    if not assistants:
        return
    if not isinstance(assistants, Mapping):
        raise ValidationError(
            "assistants must be an object mapping models to content arrays"
        )
    for i, contents in enumerate(assistants.values()):
        if not _is_array(contents):
            raise ValidationError(f"assistants value at index {i} must be an array")
        for j, content in enumerate(contents):
            validate_content_object(content, f"assistants value[{j}]")


def validate_messages(messages: Any) -> None:
    """校验消息列表。

    每个条目必须是映射, 且至少包含 system, user, assistants 之一。

    Raises:
        ValidationError: 第一个不合法的条目或内容块。
    """
    if not _is_array(messages) or len(messages) == 0:
        raise ValidationError("messages must be a non-empty array")

    for index, entry in enumerate(messages):
        if not isinstance(entry, Mapping):
            raise ValidationError(f"messages[{index}] must be an object")

        if not any(key in entry for key in MESSAGE_KEYS):
            raise ValidationError(
                f"messages[{index}] must have at least one of: "
                + ", ".join(MESSAGE_KEYS)
            )

        _validate_message_content(entry)


def _check_min_integer(request: Mapping[str, Any], key: str, minimum: int) -> None:
    if not _present(request, key):
        return
    value = request[key]
    if not _is_integer(value) or value < minimum:
        raise ValidationError(f"{key} must be an integer >= {minimum}")


def _check_positive_number(request: Mapping[str, Any], key: str) -> None:
    if not _present(request, key):
        return
    value = request[key]
    if not _is_number(value) or value <= 0:
        raise ValidationError(f"{key} must be a positive number")


def _check_range(
    request: Mapping[str, Any], key: str, low: float, high: float
) -> None:
    if not _present(request, key):
        return
    value = request[key]
    if not _is_number(value) or not low <= value <= high:
        raise ValidationError(f"{key} must be a number between {low} and {high}")


def _check_bool(request: Mapping[str, Any], key: str) -> None:
    if _present(request, key) and not isinstance(request[key], bool):
        raise ValidationError(f"{key} must be a boolean")


def _check_string(request: Mapping[str, Any], key: str, message: str) -> None:
    if _present(request, key) and not isinstance(request[key], str):
        raise ValidationError(message)


def _check_mapping(request: Mapping[str, Any], key: str) -> None:
    if _present(request, key) and not isinstance(request[key], Mapping):
        raise ValidationError(f"{key} must be an object")


def _check_response_format(request: Mapping[str, Any]) -> None:
    if not _present(request, "response_format"):
        return
    response_format = request["response_format"]
    if not isinstance(response_format, Mapping):
        raise ValidationError("response_format must be an object")
    if response_format.get("type") not in CONTENT_TYPES:
        raise ValidationError(
            f"response_format.type must be one of: {_CONTENT_TYPES_TEXT}"
        )

    model_specific = response_format.get("model_specific")
    if model_specific is None:
        return
    if not isinstance(model_specific, Mapping):
        raise ValidationError("response_format.model_specific must be an object")
    for model, kind in model_specific.items():
        if kind not in CONTENT_TYPES:
            raise ValidationError(
                f"response_format.model_specific[{model}] must be one of: "
                f"{_CONTENT_TYPES_TEXT}"
            )


def _check_model_groups(request: Mapping[str, Any], key: str) -> None:
    """comparison / combination: 布尔值或 ``{type, models}`` 列表。"""
    if not _present(request, key):
        return
    value = request[key]
    if isinstance(value, bool):
        return
    if not _is_array(value):
        raise ValidationError(f"{key} must be a boolean or an array of objects")

    for i, group in enumerate(value):
        if not isinstance(group, Mapping):
            raise ValidationError(f"{key}[{i}] must be an object")
        if group.get("type") not in CONTENT_TYPES:
            raise ValidationError(
                f"{key}[{i}].type must be one of: {_CONTENT_TYPES_TEXT}"
            )
        models = group.get("models")
        if (
            not _is_array(models)
            or len(models) == 0
            or not all(isinstance(m, str) for m in models)
        ):
            raise ValidationError(
                f"{key}[{i}].models must be a non-empty array of strings"
            )


# ---------------------------------------------------------------------------
# 各请求类型入口
# ---------------------------------------------------------------------------


def validate_chat_request(request: Any) -> None:
    """校验对话类请求(completions, combination, search)。"""
    validate_request_object(request)
    validate_models(request.get("models"))
    validate_messages(request.get("messages"))

    _check_range(request, "temperature", 0.0, 2.0)
    _check_min_integer(request, "max_tokens", 1)
    _check_range(request, "frequency_penalty", -2.0, 2.0)
    _check_range(request, "presence_penalty", -2.0, 2.0)
    _check_bool(request, "stream")
    _check_bool(request, "web_search")
    _check_response_format(request)
    _check_model_groups(request, "comparison")
    _check_model_groups(request, "combination")
    _check_mapping(request, "model_specific_params")


def validate_image_generate(request: Any) -> None:
    """校验图片生成请求。"""
    validate_request_object(request)
    validate_models(request.get("models"))
    validate_prompt(request.get("prompt"))

    _check_min_integer(request, "width", 64)
    _check_min_integer(request, "height", 64)
    _check_min_integer(request, "n", 1)
    if _present(request, "seed") and not _is_integer(request["seed"]):
        raise ValidationError("seed must be an integer or null")
    _check_string(request, "style_preset", "style_preset must be a string or null")
    _check_mapping(request, "model_specific_params")


def validate_image_edit(request: Any) -> None:
    """校验图片编辑请求。"""
    validate_request_object(request)
    validate_models(request.get("models"))
    validate_prompt(request.get("prompt"))
    validate_non_empty_string(request.get("image_file"), "image_file")


def validate_audio_generate(request: Any) -> None:
    """校验音频生成请求。"""
    validate_request_object(request)
    validate_models(request.get("models"))
    validate_prompt(request.get("prompt"))
    _check_mapping(request, "model_specific_params")


def validate_tts(request: Any) -> None:
    """校验文本转语音请求, 只允许一个模型。"""
    validate_request_object(request)
    validate_models(request.get("models"), single_model_operation="text-to-speech")
    validate_prompt(request.get("prompt"))
    _check_string(request, "voice", "voice must be a string")
    _check_mapping(request, "model_specific_params")


def validate_stt(request: Any) -> None:
    """校验语音转文本请求, 只允许一个模型。"""
    validate_request_object(request)
    validate_models(request.get("models"), single_model_operation="speech-to-text")
    validate_non_empty_string(request.get("audio_file"), "audio_file")
    _check_mapping(request, "model_specific_params")


def validate_video_generate(request: Any) -> None:
    """校验视频生成请求。"""
    validate_request_object(request)
    validate_models(request.get("models"))
    validate_prompt(request.get("prompt"))

    _check_positive_number(request, "duration")
    _check_bool(request, "loop")
    if _present(request, "aspect_ratio") and not _is_pair(request["aspect_ratio"], ":"):
        raise ValidationError(
            "aspect_ratio must be in the format 'width:height' (e.g., '16:9')"
        )
    _check_positive_number(request, "fps")
    if _present(request, "dimension") and not _is_pair(request["dimension"], "x"):
        raise ValidationError(
            "dimension must be in the format 'widthxheight' (e.g., '1280x720')"
        )
    if _present(request, "seed") and not _is_integer(request["seed"]):
        raise ValidationError("seed must be an integer")
    _check_mapping(request, "model_specific_params")


def validate_request_id(request_id: Any) -> None:
    """校验视频任务 ID。"""
    validate_non_empty_string(request_id, "request_id")


__all__ = [
    "MESSAGE_KEYS",
    "MODELS_NOT_STRINGS",
    "MODELS_REQUIRED",
    "validate_audio_generate",
    "validate_chat_request",
    "validate_content_object",
    "validate_image_edit",
    "validate_image_generate",
    "validate_messages",
    "validate_models",
    "validate_non_empty_string",
    "validate_prompt",
    "validate_request_id",
    "validate_request_object",
    "validate_stt",
    "validate_tts",
    "validate_video_generate",
]
