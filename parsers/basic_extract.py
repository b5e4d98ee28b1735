import re
from typing import List

from schemas import ContactInfo

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b", re.ASCII)
# ASCII digits only. Permissive on purpose: any bare 10-digit run also matches
PHONE_PATTERN = re.compile(r"\b(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b", re.ASCII)

MAX_SKILLS = 12

SKILL_VOCABULARY = [
    'python', 'java', 'javascript', 'typescript', 'c++', 'c#', 'ruby', 'php', 'swift', 'kotlin',
    'react', 'angular', 'vue', 'svelte', 'nextjs', 'gatsby', 'redux',
    'nodejs', 'node.js', 'express', 'nestjs', 'django', 'flask', 'spring', 'laravel',
    'mongodb', 'mysql', 'postgresql', 'redis', 'dynamodb', 'cassandra', 'sql', 'nosql',
    'aws', 'azure', 'gcp', 'google cloud', 'heroku', 'digitalocean',
    'docker', 'kubernetes', 'jenkins', 'gitlab ci', 'github actions', 'terraform', 'ansible',
    'git', 'github', 'bitbucket', 'jira', 'confluence',
    'html', 'css', 'sass', 'less', 'bootstrap', 'tailwind', 'material-ui',
    'rest api', 'graphql', 'grpc', 'soap', 'websocket',
    'microservices', 'serverless', 'devops', 'ci/cd', 'agile', 'scrum', 'kanban',
    'machine learning', 'deep learning', 'ai', 'data science', 'tensorflow', 'pytorch', 'keras',
    'pandas', 'numpy', 'scikit-learn', 'opencv',
    'testing', 'jest', 'mocha', 'pytest', 'junit', 'selenium', 'cypress',
    'linux', 'unix', 'bash', 'shell scripting', 'windows', 'macos',
]


def extract_contact_info(text: str) -> ContactInfo:
    email = EMAIL_PATTERN.search(text or "")
    phone = PHONE_PATTERN.search(text or "")
    return ContactInfo(
        email=email.group(0) if email else "N/A",
        phone=phone.group(0) if phone else "N/A",
    )


def extract_skills(text: str) -> List[str]:
    """Vocabulary terms contained in the text, in vocabulary order, at most 12."""
    text_lower = (text or "").lower()
    found = [s for s in SKILL_VOCABULARY if s in text_lower]
    return list(dict.fromkeys(found))[:MAX_SKILLS]
