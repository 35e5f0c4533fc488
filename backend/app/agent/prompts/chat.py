FALLBACK_CONTEXT = (
    "Front-end and full-stack developer working with HTML, CSS, JavaScript, React, "
    "Node.js and Python, with projects covering responsive websites, web applications "
    "and third-party API integrations."
)

NO_RESPONSE_PLACEHOLDER = "⚠️ Could not generate a response."

DEFAULT_TECHNOLOGIES = "HTML, CSS, JavaScript"
NOT_AVAILABLE = "Not available"

PROJECT_SEPARATOR = "\n\n---\n\n"

PROJECT_TEMPLATE = """
PROJECT: {name}
Description: {description}
Type: {type}
Technologies: {technologies}
Live URL: {url}
Repository: {repository}
Documentation: {readme}
""".strip()

CONTEXT_HEADER = "PORTFOLIO PROJECTS:"

CONTEXT_INSTRUCTIONS = """
You are the assistant for this developer portfolio. Answer only from the projects
listed above. When a question is about a specific project, organise the answer in
these sections:
- Overview: what the project is and who it is for.
- Technologies: the stack and why it fits.
- Features: the main functionality.
- Links: live URL, repository and documentation when available.
If the question is not covered by the projects, say so briefly and suggest a related project.
""".strip()

CHAT_PROMPT_TEMPLATE = """
{context}

USER QUESTION: {message}

FORMATTING RULES:
- Answer in Markdown, using "###" headings for each section.
- Section headings may only use these icons: 📌 🛠️ ✨ 🔗 💡
- Keep it specific and technical, based on the projects listed above.
- Use bullet lists for technologies and features.
""".strip()
