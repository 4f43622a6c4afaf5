"""
OpenAI helpers — relevance scoring for fetched news articles.

The client is built explicitly by the app factory and passed to RelevanceScorer;
nothing here holds a module-level client.
"""
import json
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger('services.openai')

FALLBACK_SCORE = 50
FALLBACK_TIP = 'Review this recent news about the company for conversation starters.'
FALLBACK_CATEGORY = 'Other'

CATEGORIES = ['Funding', 'Expansion', 'Leadership', 'Product Launch', 'Partnership', 'Industry News', 'Other']


def make_openai_client(api_key: Optional[str]):
    """Build an OpenAI client, or return None when no key is configured."""
    if not api_key:
        logger.warning("OPENAI_API_KEY not set — news relevance scoring disabled")
        return None
    from openai import OpenAI
    client = OpenAI(api_key=api_key)
    logger.info("OpenAI client initialized successfully")
    return client


def _clamp_score(value) -> float:
    try:
        score = float(value)
    except (TypeError, ValueError):
        return FALLBACK_SCORE
    return max(0.0, min(100.0, score))


class RelevanceScorer:
    """Rates how useful an article is for a sales conversation with a prospect."""

    def __init__(self, client, model: str = 'gpt-4o-mini'):
        self.client = client
        self.model = model

    def _prompt(self, article: Dict[str, Any], identity) -> str:
        return f"""You are analyzing a news article for sales intelligence.

Company: {identity.company}
Industry/Type: {identity.prospect_type or 'Not specified'}
Country: {identity.country or 'Not specified'}

Article Title: {article.get('title', '')}
Article Description: {article.get('snippet') or 'No description'}

Analyze this article and provide:
1. Relevance Score (0-100): How relevant is this to our sales opportunity?
2. Category: One of [{', '.join(CATEGORIES)}]
3. AI Sales Tip: One actionable sentence on how to use this information in sales conversation.

Respond in JSON:
{{
  "relevanceScore": 85,
  "category": "Expansion",
  "aiTip": "Mention their recent expansion as validation of growth trajectory."
}}"""

    def score(self, article: Dict[str, Any], identity) -> Dict[str, Any]:
        """
        Return {relevance_score, category, ai_tip}.

        Scoring is advisory, so any API or parsing error yields the neutral
        fallback instead of failing the fetch.
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{'role': 'user', 'content': self._prompt(article, identity)}],
                response_format={'type': 'json_object'},
            )
            data = json.loads(response.choices[0].message.content)
            return {
                'relevance_score': _clamp_score(data.get('relevanceScore', FALLBACK_SCORE)),
                'category': data.get('category') or FALLBACK_CATEGORY,
                'ai_tip': data.get('aiTip') or FALLBACK_TIP,
            }
        except Exception as e:
            logger.warning("Relevance scoring failed for '%s': %s", article.get('title', '')[:60], e)
            return {
                'relevance_score': float(FALLBACK_SCORE),
                'category': FALLBACK_CATEGORY,
                'ai_tip': FALLBACK_TIP,
            }
