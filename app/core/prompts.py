from langchain_core.prompts import ChatPromptTemplate

cleaning_template = """<task>
{task}
</task>

<content>
{content}
</content>"""

CLEANING_PROMPT = ChatPromptTemplate.from_messages([
    ("human", cleaning_template)
])

ARTICLE_CLEANUP_TASK = """You are an expert in analyzing long form content. Clean up this raw video transcript to prepare it as an article draft.

Your tasks:
1. Remove video-specific references: "video", "subscribe", "like the video", "like button", "watch", "channel"
2. Remove chatter and small talk unrelated to the main topic
3. Remove ALL commercial content, advertisements, and promotional material:
   - Sponsored product mentions
   - Discount codes and affiliate links
   - Sponsor shoutouts
   - Self-promotion of services/products
   - Calls to action for purchasing
4. Keep only the substantive educational or informational content
5. Organize the content into clear paragraphs with logical flow
6. Fix grammar and punctuation
7. Preserve the original meaning and key insights

Return ONLY the cleaned content, ready to be read as an article. Do not add any meta-commentary about what you did."""
