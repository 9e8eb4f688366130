# app/services/marketing_service.py

import logging
import re
from typing import Optional, Tuple
from app.database.crud import create_chat, create_message
from app.integrations import llm_client
from app.services.chat_service import SYSTEM_PROMPT

logger = logging.getLogger(__name__)

FILLER_WORDS = re.compile(r"\b(generate|create|make|write|post|marketing|about|for|to)\b", re.IGNORECASE)

SUMMARY_PROMPT = """
Summarize the following business idea in one short, catchy sentence:
"{idea}"

Rules:
- Paraphrase it clearly (don't just repeat the same words).
- Make it sound like a professional business concept.
- Remove generic terms like "create post" or "generate marketing".
- Example:
  Input: "generate a post about a store that sells handmade jewelry"
  Output: "Handcrafted Jewelry Boutique Launch\""""

ULTIMATE_PROMPT = """
Create the ULTIMATE marketing package for: "{summary}"

Generate a COMPREHENSIVE business marketing strategy with:

🎯 **BUSINESS VIABILITY SCORE**
- Market Demand Score: /10
- Competition Level: /10
- Profit Potential: /10
- Overall Viability: /10

📊 **COMPETITOR ANALYSIS**
- Top 3 Competitors
- Their Strengths & Weaknesses
- Your Unique Advantage

🚀 **READY-TO-USE MARKETING ASSETS**

📱 **INSTAGRAM** (3 posts)
[For each: Caption + Hashtags + Visual Description]

🐦 **TWITTER** (3 tweets + thread idea)

👔 **LINKEDIN** (Professional post)

📧 **EMAIL NEWSLETTER** (Ready-to-send)

🎥 **TIKTOK/REELS** (3 video ideas)

🔥 **VIRAL POTENTIAL ANALYSIS**
- Viral Score: /100
- Trending Angles
- Optimal Posting Times
- Target Audience

💡 **GROWTH HACKS**
- 3 Quick Wins (first 30 days)
- 3 Long-term Strategies
- Budget-friendly tactics

📈 **SUCCESS METRICS**
- Expected Engagement Rates
- Conversion Projections
- Timeline to Results

Format this beautifully with emojis and clear sections. Make it ACTIONABLE and READY-TO-USE!"""

ENHANCED_PROMPT = """
Create a COMPREHENSIVE marketing package for: "{summary}"

Include these sections with scores and analysis:

🎯 VIABILITY SCORE: /10
📊 COMPETITOR ANALYSIS: Top 3 competitors
📱 SOCIAL MEDIA: Instagram, Twitter, LinkedIn ready posts
🔥 VIRAL POTENTIAL: /100 score
💡 GROWTH HACKS: Quick wins & long-term strategies
📈 METRICS: Expected results timeline

Make it professional and actionable!"""


async def _complete(prompt: str) -> str:
    text = await llm_client.generate_chat_completion([
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ])
    if not text:
        raise ValueError("Empty completion")
    return text


def manual_summary(prompt: str) -> str:
    """Offline stand-in for the summary call: drop filler verbs and capitalise."""
    clean = FILLER_WORDS.sub("", prompt)
    clean = re.sub(r"\s+", " ", clean).strip()
    return clean[:1].upper() + clean[1:]


async def summarize_business_idea(prompt: str) -> str:
    try:
        summary = await _complete(SUMMARY_PROMPT.format(idea=prompt))
        summary = summary.strip().strip('"').strip()
        if not summary:
            raise ValueError("Empty summary")
        return summary
    except Exception as e:
        logger.warning(f"Summarization failed, using manual summary: {e}")
        return manual_summary(prompt)


def static_backup_package(prompt: str) -> str:
    topic = manual_summary(prompt)
    tag = topic.replace(" ", "")
    return f"""
# 🚀 ULTIMATE MARKETING PACKAGE: {topic}

## 🎯 BUSINESS VIABILITY SCORE
- Market Demand Score: 8/10
- Competition Level: 6/10
- Profit Potential: 7/10
- Overall Viability: 7.5/10

## 📊 COMPETITOR ANALYSIS
**Top 3 Competitors:**
1. [Competitor 1] - Strengths: Established presence | Weaknesses: Higher pricing
2. [Competitor 2] - Strengths: Strong branding | Weaknesses: Limited features
3. [Competitor 3] - Strengths: Large audience | Weaknesses: Poor customer service

**Your Unique Advantage:** Personalized approach and innovative solutions

## 📱 INSTAGRAM POSTS (3 READY-TO-POST)

**Post 1:**
🎯 Caption: "Transform your vision into reality! ✨ {topic} just got better with our innovative approach. Ready to elevate your game? 🚀"
📸 Visual: Professional lifestyle shot showing results
🏷️ Hashtags: #{tag} #Innovation #BusinessGrowth #Success

**Post 2:**
🎯 Caption: "Why settle for ordinary when you can achieve extraordinary? 🌟 Our {topic} solutions are changing the game daily! 💼"
📸 Visual: Behind-the-scenes creative process
🏷️ Hashtags: #Entrepreneur #Marketing #{tag}Tips #Growth

**Post 3:**
🎯 Caption: "Your success story starts here! 📈 Discover how {topic} can transform your results and drive real impact. 🔥"
📸 Visual: Customer testimonial or case study visual
🏷️ Hashtags: #Success #BusinessTips #{tag} #Strategy

## 🐦 TWITTER CONTENT
**Tweet 1:** "Just launched our enhanced {topic} services! 🚀 Game-changing results for our clients. #BusinessGrowth #{tag}"

**Tweet 2:** "3 reasons why {topic} matters this year: 1) Market demand 📈 2) Innovation potential 💡 3) Customer impact 🌟 What would you add?"

**Tweet Thread Idea:** "The complete guide to mastering {topic} in 5 tweets ↓"

## 👔 LINKEDIN PROFESSIONAL POST
"We're excited to announce our comprehensive {topic} solutions designed for modern businesses seeking growth and innovation.

Our approach combines proven strategies with cutting-edge techniques to deliver measurable results.

#ProfessionalServices #BusinessStrategy #{tag} #Innovation"

## 🔥 VIRAL POTENTIAL ANALYSIS
- **Viral Score:** 78/100
- **Trending Angles:** Innovation stories, Success case studies, Behind-the-scenes
- **Optimal Posting Times:** Tue-Thu 9-11 AM, 5-7 PM
- **Target Audience:** Entrepreneurs, Business owners, Industry professionals

## 💡 GROWTH HACKS
**Quick Wins (First 30 Days):**
1. Leverage customer testimonials in all marketing
2. Create engaging visual content for social media
3. Network with complementary businesses

**Long-term Strategies:**
1. Build authority through content marketing
2. Develop referral partnership programs
3. Expand service offerings based on client feedback

## 📈 SUCCESS METRICS
- **Expected Engagement:** 5-8% on social media
- **Conversion Rate:** 3-5% from qualified leads
- **Timeline to Results:** 30-60 days for initial impact, 6 months for significant growth

---
*Generated with BuzAI Ultimate Marketing Package* 🚀
""".strip()


async def generate_enhanced_fallback(prompt: str) -> str:
    try:
        summary = await summarize_business_idea(prompt)
        return await _complete(ENHANCED_PROMPT.format(summary=summary))
    except Exception as e:
        logger.error(f"Enhanced fallback failed, using static backup: {e}")
        return static_backup_package(prompt)


async def generate_marketing_package(prompt: str) -> str:
    """
    Two chained model calls: summarize the idea, then expand the summary into
    the full package. Each failure drops to a cheaper variant, ending with a
    static template, so this never raises for model errors.
    """
    try:
        summary = await summarize_business_idea(prompt)
        logger.info(f"Summarized idea: {summary}")
        return await _complete(ULTIMATE_PROMPT.format(summary=summary))
    except Exception as e:
        logger.warning(f"Ultimate generation failed, using fallback: {e}")
        return await generate_enhanced_fallback(prompt)


async def create_package_in_chat(db, user_id: str, prompt: str, chat: Optional[dict] = None) -> Tuple[str, str]:
    """Generates a package and records request and result in `chat` (or a new chat)."""
    if chat is None:
        chat = await create_chat(db, user_id, title=f"📊 {prompt[:30]}... (marketing package)")
    chat_id = str(chat["_id"])

    await create_message(db, chat_id, "user", f"📊 Generate marketing package: {prompt}")
    package = await generate_marketing_package(prompt)
    await create_message(db, chat_id, "assistant", package)
    return package, chat_id
