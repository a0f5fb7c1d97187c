"""Prompt templates and canned replies for AstroBot."""

PERSONA_PROMPT = """You are AstroBot, an enthusiastic and knowledgeable space exploration assistant powered by NASA open data and Gemini. You make complex space topics accessible and exciting.

Guidelines:
- Keep responses conversational and engaging (2-3 sentences for simple questions, 4-6 for explanations).
- Use friendly, encouraging language with a sense of wonder about space.
- When translating NASA data, simplify technical jargon into clear, relatable language.
- Use analogies to explain complex concepts (e.g. "A neutron star is so dense that a teaspoon would weigh as much as Mount Everest!").
- Include fascinating facts when relevant.
- For greetings, respond warmly and invite exploration.
- If the user seems curious, suggest follow-up topics to explore."""

VISION_DEFAULT_PROMPT = (
    "What do you see in this image? Please describe it in detail, "
    "especially if it's related to space, astronomy, or science."
)

VISION_APOLOGY = (
    "I'm having trouble analyzing the image right now. "
    "Could you describe what you'd like to know about it?"
)

VISION_EMPTY_REPLY = (
    "I analyzed your image, but couldn't generate a description. "
    "Could you tell me more about what you'd like to know?"
)

TRANSLATION_PROMPT_TEMPLATE = """Translate the following English text to {language}. Provide ONLY the translated text without any explanations, notes, or additional context:

{text}"""

TRANSLATION_LANGUAGES = {
    "hindi": "Hindi (हिन्दी)",
    "nepali": "Nepali (नेपाली)",
}

# Keyword -> answer, checked in order when no provider could answer.
CANNED_REPLIES = {
    "hello": (
        "Hello! I'm AstroBot. I can help you explore NASA's space data and answer questions "
        "about the cosmos. What would you like to learn about?"
    ),
    "space": (
        "Space is the vast expanse beyond Earth's atmosphere. It contains countless stars, "
        "galaxies, planets, and other celestial objects. NASA continuously explores space to "
        "understand the universe better."
    ),
    "universe": (
        "The universe is everything - all galaxies, stars, planets, and space itself. Scientists "
        "estimate it's about 13.8 billion years old. NASA studies the universe using telescopes "
        "and space missions."
    ),
    "earth": (
        "Earth is our home planet, located in the habitable zone of our solar system. NASA "
        "monitors Earth's climate, weather, and changes to help us understand our planet better."
    ),
}

DEFAULT_REPLY = (
    "That's an interesting question about space! I specialize in information from NASA's "
    "databases about asteroids, Mars rovers, astronomy imagery, and space exploration. I can "
    "help you explore near-Earth objects, view the latest rover photos, learn about the "
    "Astronomy Picture of the Day, or discuss general space topics. What would you like to "
    "know more about?"
)


def build_translation_prompt(text: str, language: str) -> str:
    """Build the translate prompt; unknown languages default to Hindi."""
    target = TRANSLATION_LANGUAGES.get(language, TRANSLATION_LANGUAGES["hindi"])
    return TRANSLATION_PROMPT_TEMPLATE.format(language=target, text=text)


def canned_reply(message: str) -> str:
    """Static answer for when neither NASA nor Gemini can respond."""
    lowered = message.lower()
    for keyword, reply in CANNED_REPLIES.items():
        if keyword in lowered:
            return reply
    return DEFAULT_REPLY


def summarize_asteroids(data: dict) -> str:
    """Summarize a NeoWs browse page: total tracked and hazardous among the first three."""
    total = (data.get("page") or {}).get("total_elements")
    count = f"{total:,}" if isinstance(total, int) else "thousands of"
    text = (
        f"NASA actively tracks {count} near-Earth asteroids! These cosmic rocks orbit close "
        "enough to Earth that we monitor them carefully. "
    )

    recent = (data.get("near_earth_objects") or [])[:3]
    if recent:
        hazardous = sum(1 for neo in recent if neo.get("is_potentially_hazardous_asteroid"))
        names = ", ".join(neo.get("name", "unnamed") for neo in recent)
        verb = "is" if hazardous == 1 else "are"
        text += (
            f"Of the {len(recent)} I just looked at ({names}), {hazardous} {verb} classified as "
            "potentially hazardous, meaning they're large enough and pass close enough that we "
            "keep a watchful eye on them. "
        )

    text += (
        "The good news? No known asteroid poses a threat to Earth in the foreseeable future. "
        "Apophis will make an incredibly close pass in 2029, close enough to see with the naked "
        "eye! Would you like to know more about specific asteroids or how we track them?"
    )
    return text


def summarize_rover_photos(photos: list[dict]) -> str:
    """Summarize Curiosity's latest sol of photos."""
    text = "Curiosity rover is still going strong on Mars after landing in 2012! "

    if photos:
        sol = photos[0].get("sol", "recent")
        earth_date = photos[0].get("earth_date")
        when = f" (Earth date {earth_date})" if earth_date else ""
        text += (
            f"It just sent back {len(photos)} new photos from Sol {sol}{when}. These images help "
            "scientists study Martian geology, search for signs of ancient water, and understand "
            "if Mars could have supported microbial life. "
        )

    text += (
        "Along with Perseverance, these rovers are our eyes on the Red Planet, exploring ancient "
        "riverbeds and drilling into rocks billions of years old. Want to see the latest images?"
    )
    return text


def summarize_apod(data: dict) -> str:
    """Summarize an APOD entry: title plus the start of the explanation."""
    title = data.get("title", "an unnamed cosmic view")
    text = f'The Astronomy Picture of the Day for {data.get("date", "today")} features "{title}"! '

    explanation = data.get("explanation")
    if explanation:
        text += f"{explanation[:250].rstrip()}... "

    text += (
        "\n\nNASA has been sharing space imagery through APOD since 1995. Each image comes with "
        "an explanation written by a professional astronomer. Want to explore more from the archive?"
    )
    return text
