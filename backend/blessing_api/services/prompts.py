"""
Prompt templates for each greeting scenario.
"""

from typing import Callable, Dict

from blessing_api.models.request import BlessingRequest, ScenarioType


SYSTEM_PROMPT = "你是有10年经验的祝福语创作专家，擅长生成温暖且有创意的祝福内容"


# =============================================================================
# SCENARIO PROMPTS
# =============================================================================

def _weather_prompt(request: BlessingRequest) -> str:
    imagery = "雨水滋润" if request.weather and "雨" in request.weather else "阳光温暖"
    return f"""作为祝福语创作专家，请根据以下天气数据生成祝福语：
- 温度：{request.temp}℃
- 天气状况：{request.weather}
要求：
1. 结合气象特征（如{imagery}）
2. 使用口语化表达，不超过50字
3. 包含积极向上的情感元素
4. 不要有多余的解释"""


def _birthday_prompt(request: BlessingRequest) -> str:
    register = "符合年龄阶段" if request.age else "普适"
    return f"""为以下对象创作生日祝福：
- 姓名：{request.name}
- 年龄：{request.age or "未知"}
要求：
1. 使用{register}的表达方式
2. 包含至少1个相关emoji
3. 突出祝福重点
4. 不要有多余的解释"""


def _mbti_prompt(request: BlessingRequest) -> str:
    return f"""根据MBTI性格类型生成专属祝福：
- 类型：{request.mbti_type}
- 关系：{request.relationship}
要求：
1. 结合该类型认知功能特点
2. 使用对应的比喻手法（如NT型用科技类比）
3. 保持亲切自然的口吻
4. 不要有多余的解释"""


PROMPT_BUILDERS: Dict[ScenarioType, Callable[[BlessingRequest], str]] = {
    ScenarioType.WEATHER: _weather_prompt,
    ScenarioType.BIRTHDAY: _birthday_prompt,
    ScenarioType.MBTI: _mbti_prompt,
}


def build_prompt(request: BlessingRequest) -> str:
    """Build the user prompt for a validated request."""
    return PROMPT_BUILDERS[request.scenario](request)
