import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type, TypeVar

import openai
from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from config.settings import get_settings
from domain.entities.generation_config import GenerationConfig, resolve_generation_config

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

ToolDispatcher = Callable[[str, Dict[str, Any]], Awaitable[Dict[str, Any]]]

# ツール呼び出しループの最大ステップ数 (無限ループ防止)
MAX_TOOL_STEPS = 5

JSON_INSTRUCTION = (
    "Respond only with a single JSON object that conforms to this JSON schema, "
    "without markdown fences or any other text:\n{schema}"
)


class TextGenerationError(Exception):
    """LLM呼び出しの失敗 (HTTPステータスが分かる場合は保持する)"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def strip_code_fence(content: str) -> str:
    """```json ... ``` で囲まれた応答から中身を取り出す"""
    content = content.strip()
    if content.startswith("```"):
        content = content.split("```")[1]
        if content.startswith("json"):
            content = content[4:]
        content = content.strip()
    return content


def parse_json_object(content: Optional[str]) -> Dict[str, Any]:
    """LLMの応答をJSONオブジェクトとして読み取る"""
    if not content:
        raise TextGenerationError("LLM returned an empty response")
    try:
        data = json.loads(strip_code_fence(content))
    except json.JSONDecodeError as e:
        raise TextGenerationError(f"LLM returned malformed JSON: {str(e)}")
    if not isinstance(data, dict):
        raise TextGenerationError("LLM returned JSON that is not an object")
    return data


def parse_structured_output(content: Optional[str], output_model: Type[T]) -> T:
    """LLMの応答を出力スキーマで検証する"""
    data = parse_json_object(content)
    try:
        return output_model.model_validate(data)
    except ValidationError as e:
        raise TextGenerationError(f"LLM output does not match {output_model.__name__}: {str(e)}")


class TextGenerationService(ABC):
    """テキスト生成サービスの抽象クラス"""

    @abstractmethod
    async def generate_structured(
        self, prompt: str, output_model: Type[T], config: Optional[GenerationConfig] = None
    ) -> T:
        """プロンプトを送信し、出力スキーマに沿った結果を返す"""
        pass

    @abstractmethod
    async def generate_with_tools(
        self,
        prompt: str,
        output_model: Type[BaseModel],
        tools: List[Dict[str, Any]],
        dispatcher: ToolDispatcher,
        config: Optional[GenerationConfig] = None,
    ) -> Optional[Dict[str, Any]]:
        """ツールを利用可能にした状態で生成し、最終応答のJSONオブジェクトを返す

        最終応答が得られない場合や JSON として読めない場合は None を返す。
        """
        pass


class OpenAITextGenerationService(TextGenerationService):
    """OpenAI API (または互換エンドポイント) を使用したテキスト生成サービス"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        send_top_k: Optional[bool] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        settings = get_settings()
        self.api_key = api_key or settings.openai_api_key
        self.base_url = base_url or settings.openai_base_url
        self.model = model or settings.llm_model
        # top_k is not part of the OpenAI API; only compatible backends accept it
        self.send_top_k = settings.llm_supports_top_k if send_top_k is None else send_top_k
        self._client = client

        if not self.api_key and client is None:
            logger.warning("OPENAI_API_KEY is not set. LLM calls will fail until it is configured.")

    @property
    def client(self) -> AsyncOpenAI:
        """クライアントは最初の呼び出し時に生成する (APIキー未設定なら TextGenerationError)"""
        if self._client is None:
            if not self.api_key:
                raise TextGenerationError("OPENAI_API_KEY environment variable is required")
            self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url)
        return self._client

    def _sampling_kwargs(self, config: Optional[GenerationConfig]) -> Dict[str, Any]:
        resolved = resolve_generation_config(config)
        kwargs: Dict[str, Any] = {
            "temperature": resolved.temperature,
            "top_p": resolved.top_p,
            "max_tokens": resolved.max_output_tokens,
        }
        if self.send_top_k:
            kwargs["extra_body"] = {"top_k": resolved.top_k}
        return kwargs

    @staticmethod
    def _messages(prompt: str, output_model: Type[BaseModel]) -> List[Dict[str, Any]]:
        schema = json.dumps(output_model.model_json_schema(), ensure_ascii=False)
        return [
            {"role": "system", "content": JSON_INSTRUCTION.format(schema=schema)},
            {"role": "user", "content": prompt},
        ]

    async def _complete(self, messages: List[Dict[str, Any]], config: Optional[GenerationConfig], **extra: Any):
        try:
            return await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                response_format={"type": "json_object"},
                **self._sampling_kwargs(config),
                **extra,
            )
        except openai.APIStatusError as e:
            raise TextGenerationError(f"OpenAI API error: {str(e)}", status_code=e.status_code) from e
        except openai.OpenAIError as e:
            raise TextGenerationError(f"OpenAI API error: {str(e)}") from e

    async def generate_structured(
        self, prompt: str, output_model: Type[T], config: Optional[GenerationConfig] = None
    ) -> T:
        completion = await self._complete(self._messages(prompt, output_model), config)
        return parse_structured_output(completion.choices[0].message.content, output_model)

    async def generate_with_tools(
        self,
        prompt: str,
        output_model: Type[BaseModel],
        tools: List[Dict[str, Any]],
        dispatcher: ToolDispatcher,
        config: Optional[GenerationConfig] = None,
    ) -> Optional[Dict[str, Any]]:
        messages = self._messages(prompt, output_model)

        for step in range(MAX_TOOL_STEPS):
            completion = await self._complete(messages, config, tools=tools)
            message = completion.choices[0].message

            if not message.tool_calls:
                try:
                    return parse_json_object(message.content)
                except TextGenerationError as e:
                    logger.warning(f"Discarding final LLM reply: {str(e)}")
                    return None

            # assistant メッセージ (tool_calls を含む) を履歴に追加
            messages.append(message.model_dump(exclude_none=True))
            for tool_call in message.tool_calls:
                name = tool_call.function.name
                try:
                    arguments = json.loads(tool_call.function.arguments or "{}")
                except json.JSONDecodeError:
                    arguments = {}
                logger.info(f"Step {step + 1}: tool call {name}({arguments})")
                result = await dispatcher(name, arguments)
                messages.append(
                    {
                        "role": "tool",
                        "tool_call_id": tool_call.id,
                        "content": json.dumps(result, ensure_ascii=False),
                    }
                )

        logger.warning(f"No final LLM reply after {MAX_TOOL_STEPS} steps")
        return None


def get_text_generation_service() -> TextGenerationService:
    """テキスト生成サービスのファクトリ関数"""
    return OpenAITextGenerationService()
