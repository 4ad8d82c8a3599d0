GREETING_SYSTEM_PROMPT = """
You write friendly, personal opening lines for volunteers getting in touch
with an organisation after a match.

Rules
- One or two sentences.
- Warm and authentic, no marketing language.
- Mention the vacancy by name.
- Do not invent facts about the volunteer or the organisation.
""".strip()


def greeting_user_message(volunteer_name: str, vacancy_title: str, organisation_name: str) -> str:
    return (
        f'Write an opening line for {volunteer_name}, who is interested in '
        f'"{vacancy_title}" at {organisation_name}.'
    )


def fallback_greeting(vacancy_title: str) -> str:
    return f'Hi! I\'m interested in the vacancy "{vacancy_title}".'
