from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from prompthub.dto.entities import Category, Prompt

# Stable ids so every store seeded from this catalog agrees on references.
SEED_CATEGORIES: list[dict[str, Any]] = [
    {"id": "c-writing", "name": "Writing", "icon": "fas fa-pen-nib", "color": "primary",
     "description": "Content creation and copywriting prompts"},
    {"id": "c-coding", "name": "Coding", "icon": "fas fa-code", "color": "green-500",
     "description": "Programming and development prompts"},
    {"id": "c-marketing", "name": "Marketing", "icon": "fas fa-bullhorn", "color": "blue-500",
     "description": "Marketing and advertising prompts"},
    {"id": "c-business", "name": "Business", "icon": "fas fa-briefcase", "color": "orange-500",
     "description": "Business strategy and analysis prompts"},
    {"id": "c-education", "name": "Education", "icon": "fas fa-graduation-cap", "color": "purple-500",
     "description": "Learning and teaching prompts"},
    {"id": "c-productivity", "name": "Productivity", "icon": "fas fa-tasks", "color": "indigo-500",
     "description": "Personal productivity and organization prompts"},
    {"id": "c-creative", "name": "Creative", "icon": "fas fa-palette", "color": "pink-500",
     "description": "Creative writing and storytelling prompts"},
]

# age_hours sets created_at/updated_at relative to load time.
SEED_PROMPTS: list[dict[str, Any]] = [
    {
        "id": "p-blog-writer",
        "title": "Blog Post Writer",
        "description": "Create engaging blog posts with proper structure, SEO optimization, "
        "and compelling introductions that hook readers from the start.",
        "content": (
            "You are an expert blog writer specializing in engaging, SEO-optimized content. "
            "Write a comprehensive blog post about [TOPIC] that:\n\n"
            "1. Starts with a compelling hook\n"
            "2. Uses clear headings and subheadings\n"
            "3. Incorporates the keywords [KEYWORDS] naturally\n"
            "4. Provides actionable insights and practical examples\n"
            "5. Ends with a strong conclusion and a call-to-action\n\n"
            "Target audience: [AUDIENCE]\nTone: [TONE]\nWord count: [WORD_COUNT]"
        ),
        "category_id": "c-writing",
        "is_featured": True,
        "views": 2400,
        "likes": 324,
        "age_hours": 48,
    },
    {
        "id": "p-code-explainer",
        "title": "Code Explainer",
        "description": "Break down complex code snippets into easy-to-understand explanations "
        "with examples and best practices.",
        "content": (
            "You are an expert programmer and teacher. Explain the following code snippet:\n\n"
            "[CODE_SNIPPET]\n\n"
            "Provide an overview, a line-by-line breakdown, the key concepts used, best practices, "
            "common pitfalls and an example usage. Pitch the explanation at [SKILL_LEVEL] programmers."
        ),
        "category_id": "c-coding",
        "is_featured": True,
        "views": 1800,
        "likes": 245,
        "age_hours": 24,
    },
    {
        "id": "p-cold-email",
        "title": "Cold Email Generator",
        "description": "Craft personalized cold emails that get responses with proven frameworks "
        "and persuasive copy techniques.",
        "content": (
            "You are a cold email specialist with expertise in B2B outreach. Create a cold email for "
            "[PURPOSE] with three subject line options under 50 characters, a personal opener, a clear "
            "value proposition, one line of social proof and a low-commitment call-to-action.\n\n"
            "Recipient: [RECIPIENT_NAME] at [COMPANY]\nTheir role: [ROLE]\nOffering: [PRODUCT]\n\n"
            "Keep it under 150 words."
        ),
        "category_id": "c-marketing",
        "is_featured": True,
        "views": 3100,
        "likes": 428,
        "age_hours": 3,
    },
    {
        "id": "p-meeting-summary",
        "title": "Meeting Summarizer",
        "description": "Transform meeting transcripts into clear, actionable summaries with key "
        "decisions and next steps.",
        "content": (
            "You are an expert note-taker. Summarize the following meeting transcript:\n\n"
            "[MEETING_TRANSCRIPT]\n\n"
            "Structure the summary as: key discussion points, decisions made, action items "
            "(owner and due date for each) and open follow-up questions."
        ),
        "category_id": "c-business",
        "is_featured": False,
        "views": 950,
        "likes": 112,
        "age_hours": 6,
    },
    {
        "id": "p-study-guide",
        "title": "Study Guide Creator",
        "description": "Turn any subject into a structured study guide with summaries, key terms "
        "and practice questions.",
        "content": (
            "Act as an experienced tutor. Build a study guide on [SUBJECT] for a [LEVEL] learner "
            "preparing for [EXAM]. Include a short overview, the ten most important terms with "
            "definitions, a summary of each core concept and five practice questions with answers."
        ),
        "category_id": "c-education",
        "is_featured": False,
        "views": 700,
        "likes": 88,
        "age_hours": 26,
    },
    {
        "id": "p-social-post",
        "title": "Social Media Post Generator",
        "description": "Write platform-specific social posts with hooks, hashtags and a clear "
        "call-to-action.",
        "content": (
            "Write three variations of a [PLATFORM] post announcing [ANNOUNCEMENT]. Each variation "
            "needs an attention-grabbing first line, a body that fits the platform's length limits, "
            "up to five relevant hashtags and a call-to-action. Tone: [TONE]."
        ),
        "category_id": "c-writing",
        "is_featured": False,
        "views": 1200,
        "likes": 150,
        "age_hours": 30,
    },
    {
        "id": "p-landing-page",
        "title": "Landing Page Copy Creator",
        "description": "High-converting landing page copy with headline, benefits and objection "
        "handling.",
        "content": (
            "You are a conversion copywriter. Write landing page copy for [PRODUCT_NAME], a SaaS "
            "product that helps [TARGET_CUSTOMER] achieve [OUTCOME]. Provide a headline and "
            "sub-headline, three benefit sections, a short FAQ that handles the top objections and "
            "a closing call-to-action."
        ),
        "category_id": "c-marketing",
        "is_featured": True,
        "views": 1650,
        "likes": 201,
        "age_hours": 12,
    },
    {
        "id": "p-debug-assistant",
        "title": "Debug Assistant",
        "description": "Systematically track down the root cause of a bug and propose a fix.",
        "content": (
            "You are a senior software engineer helping me debug. Language: [LANGUAGE].\n\n"
            "Error message:\n[ERROR_MESSAGE]\n\nRelevant code:\n[CODE]\n\n"
            "List the most likely causes in order, explain how to confirm each one, then propose a "
            "minimal fix and a test that would have caught the bug."
        ),
        "category_id": "c-coding",
        "is_featured": True,
        "views": 2050,
        "likes": 276,
        "age_hours": 20,
    },
    {
        "id": "p-sql-query",
        "title": "SQL Query Generator",
        "description": "Translate a plain-language question into an efficient SQL query.",
        "content": (
            "Given the following schema:\n\n[SCHEMA]\n\nWrite a [DIALECT] SQL query that answers: "
            "[QUESTION]. Explain each clause, mention the indexes the query relies on and point out "
            "any edge cases such as NULL handling or duplicate rows."
        ),
        "category_id": "c-coding",
        "is_featured": False,
        "views": 1400,
        "likes": 190,
        "age_hours": 40,
    },
    {
        "id": "p-persona-builder",
        "title": "Customer Persona Builder",
        "description": "Build detailed customer personas from market research and interviews.",
        "content": (
            "Using the research notes below, create two customer personas for [BUSINESS].\n\n"
            "[RESEARCH_NOTES]\n\n"
            "For each persona give demographics, goals, frustrations, buying triggers, preferred "
            "channels and a quote that captures their mindset."
        ),
        "category_id": "c-business",
        "is_featured": False,
        "views": 820,
        "likes": 97,
        "age_hours": 50,
    },
    {
        "id": "p-daily-planner",
        "title": "Daily Planner Assistant",
        "description": "Plan a focused day around priorities, energy levels and fixed commitments.",
        "content": (
            "Help me plan my day. My top priorities are [PRIORITIES], my fixed commitments are "
            "[COMMITMENTS] and I work best in the [MORNING/AFTERNOON]. Produce a time-blocked "
            "schedule with breaks, flag anything that will not fit and suggest what to defer."
        ),
        "category_id": "c-productivity",
        "is_featured": True,
        "views": 1320,
        "likes": 164,
        "age_hours": 8,
    },
    {
        "id": "p-decision-helper",
        "title": "Decision Helper",
        "description": "Weigh options against criteria to reach a well-reasoned decision.",
        "content": (
            "I need to decide between [OPTIONS]. My criteria, in order of importance, are "
            "[CRITERIA]. Score each option against each criterion, show the weighted totals, "
            "highlight the biggest risks and recommend one option with a short justification."
        ),
        "category_id": "c-productivity",
        "is_featured": False,
        "views": 610,
        "likes": 73,
        "age_hours": 60,
    },
    {
        "id": "p-story-starter",
        "title": "Story Starter Generator",
        "description": "Generate captivating story openings with vivid characters and conflict.",
        "content": (
            "Write a captivating story opening set in [SETTING] with a protagonist who wants [GOAL] "
            "but faces [OBSTACLE]. Establish voice and atmosphere in the first paragraph and end on "
            "a line that makes the reader want to continue. Genre: [GENRE]."
        ),
        "category_id": "c-creative",
        "is_featured": True,
        "views": 2150,
        "likes": 387,
        "age_hours": 4,
    },
    {
        "id": "p-poem-generator",
        "title": "Poem Generator",
        "description": "Compose poems in a chosen form, mood and theme.",
        "content": (
            "Write a [FORM] poem about [THEME] with a [MOOD] mood. Use concrete imagery, avoid "
            "cliches, and follow the conventions of the form. Add a one-sentence note on the "
            "techniques you used."
        ),
        "category_id": "c-creative",
        "is_featured": False,
        "views": 890,
        "likes": 134,
        "age_hours": 10,
    },
]


def seed_categories() -> list[Category]:
    return [Category(**row) for row in SEED_CATEGORIES]


def seed_prompts(now: datetime | None = None) -> list[Prompt]:
    now = now or datetime.now(timezone.utc)
    prompts: list[Prompt] = []
    for row in SEED_PROMPTS:
        fields = {k: v for k, v in row.items() if k != "age_hours"}
        stamp = now - timedelta(hours=row["age_hours"])
        prompts.append(Prompt(**fields, created_at=stamp, updated_at=stamp))
    return prompts
