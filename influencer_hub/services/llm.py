# Copyright (c) 2026 Mohammed Hassan. All rights reserved.
# Proprietary and confidential. Unauthorized copying, modification, distribution, or use is prohibited.

from typing import Any
from openai import OpenAI
from influencer_hub.config import settings
from influencer_hub.logging_setup import log_event
from influencer_hub.services.content_parsing import parse_hashtags, parse_monetization

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant for social media content creation."

def get_client():
    if not settings.openai_api_key:
        raise RuntimeError("OPENAI_API_KEY is missing. Please set it in your environment or .env file.")
    return OpenAI(api_key=settings.openai_api_key)

def build_prompts(
    content_type: str,
    prompt: str,
    platform: str | None = None,
    content_length: str | None = None,
) -> tuple[str, str]:
    """Returns (system_prompt, user_prompt) for a content type. Unknown types pass the prompt through."""
    if content_type == "hashtags":
        return (
            "You are a social media hashtag expert. Generate relevant, trending hashtags for the given content. Format as a JSON array of strings.",
            f'Generate 10 engaging and relevant hashtags for this content: "{prompt}". Return only a JSON array of hashtag strings without the # symbol.',
        )
    if content_type == "caption":
        return (
            "You are a social media caption expert. Create engaging, authentic captions for social media posts.",
            f'Write an engaging {content_length or "medium-length"} caption for this post: "{prompt}". Make it sound authentic and personal.',
        )
    if content_type == "repurpose":
        return (
            "You are a content repurposing expert. Transform content to fit different platforms while maintaining the message.",
            f'Repurpose this content: "{prompt}" for {platform or "Instagram"} in a {content_length or "concise"} format. Optimize for the platform\'s style and audience.',
        )
    if content_type == "comments":
        return (
            "You are a community manager responding to social media comments. Be friendly, authentic, and engaging.",
            f'Generate a personalized response to this comment: "{prompt}". Sound authentic and conversational.',
        )
    if content_type == "monetization":
        return (
            "You are a monetization expert for social media influencers. Provide practical revenue opportunities based on engagement data.",
            f'Based on this influencer profile and engagement data: "{prompt}", suggest 3 revenue opportunities or brand partnerships that would be a good fit. Format as JSON with \'title\', \'description\', and \'estimatedValue\' fields.',
        )
    return DEFAULT_SYSTEM_PROMPT, prompt

def complete(system_prompt: str, user_prompt: str) -> str:
    """One chat completion round trip. Errors propagate to the caller."""
    client = get_client()
    response = client.chat.completions.create(
        model=settings.openai_model,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt}
        ],
        temperature=settings.openai_temperature,
    )
    return response.choices[0].message.content

def generate_content(
    content_type: str,
    prompt: str,
    platform: str | None = None,
    content_length: str | None = None,
) -> Any:
    """
    Generates content of the given type and reshapes the reply:
    hashtags always come back as a list, monetization as parsed JSON or a
    list of {title, description, estimatedValue}, everything else as text.
    """
    system_prompt, user_prompt = build_prompts(content_type, prompt, platform, content_length)
    log_event("ai_generate_start", content_type=content_type, platform=platform)

    result = complete(system_prompt, user_prompt)

    if content_type == "hashtags":
        return parse_hashtags(result)
    if content_type == "monetization":
        return parse_monetization(result)
    return result

def generate_post_caption(profile: Any) -> str:
    """Drafts a post for the profile's niche and audience."""
    parts = []
    if profile.niche:
        parts.append(f"niche: {profile.niche}")
    if profile.audience_type:
        parts.append(f"audience: {profile.audience_type}")
    if profile.audience_age:
        parts.append(f"audience age: {profile.audience_age}")
    if profile.interests:
        parts.append(f"interests: {profile.interests}")
    about = ", ".join(parts) or "general lifestyle content"

    prompt = f"A social media update from an AI influencer ({about}) sharing a fresh insight with their followers"
    return generate_content("caption", prompt, content_length="short")
