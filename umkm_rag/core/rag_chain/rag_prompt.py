"""
RAG prompt templates.

Defines the grounded-answer prompt and the canned insights question.

Dependencies: langchain_core.prompts
System role: Prompt templates for answer generation
"""

from langchain_core.prompts import ChatPromptTemplate

FALLBACK_ANSWER = (
    "Sorry, I could not find relevant information in the available data for this question."
)

SYSTEM_PROMPT = f"""Your name is Sentinela.
You are a RAG assistant that may only answer from the context provided below.

## Rules
- Answer briefly, clearly and specifically, based on the context.
- If the information is not in the context, reply exactly with:
  "{FALLBACK_ANSWER}"
- Do not use knowledge outside the context. Do not make assumptions."""

RAG_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", """Context:
{context}

Question: {question}

Answer:"""),
])

INSIGHTS_PROMPT = """Produce key insights and key strategies based on the data above.

**Important Patterns:**
1. Positive sentiment and engagement: does positive content really generate 40% higher engagement?
2. Neutral sentiment: what opportunities can UMKM capture to become more competitive from opinions that are not yet clearly positive or negative?
3. Within positive sentiment, which aspect is praised most often (price, quality, service, innovation)? How can UMKM use this for branding?
4. Based on the sentiment analysis, which digital communication strategy should UMKM run to improve their image on social media?
5. Why does only 0.6% of content trigger positive emotion?
6. Hidden potential: are there neutral posts with high engagement that could actually be categorised as positive?
7. Analyse how local UMKM in Indonesia currently use social media to build their brand image. Identify the gap between traditional social media use and a more advanced sentiment analysis approach. Provide current statistics and real case examples.

**Analysis Direction:**
- Focus: Content strategy
- Goal: Increase engagement through more emotional content
- Stakeholder: Marketing team

**Output Format:**
1. **Headline Insight**: one short sentence with the most striking finding
2. **Supporting Data**: 3-5 key figures
3. **Deep Analysis**:
    - Potential causes
    - Business implications
    - Comparison with benchmarks
4. **Recommended Actions**:
    - 2-3 concrete steps
    - Implementation timeline
    - Success metrics
5. **Risks & Opportunities**:
    - Risks if not addressed
    - Opportunities to capture
6. **Advice and Strategy**:
    - Advice for UMKM going forward
    - Strategy to use going forward

**Depth:** Comprehensive

Give a structured, in-depth answer based on the available data."""
