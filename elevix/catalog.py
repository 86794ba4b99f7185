"""Practice areas offered by the app, as listed on its feature pages."""

SOFT_SKILL_TOPICS = [
	{"id": "communication", "title": "Effective Communication"},
	{"id": "teamwork", "title": "Teamwork & Collaboration"},
	{"id": "leadership", "title": "Leadership Skills"},
	{"id": "problem-solving", "title": "Problem Solving"},
	{"id": "time-management", "title": "Time Management"},
	{"id": "adaptability", "title": "Adaptability & Flexibility"},
]

APTITUDE_SECTIONS = {
	"Quantitative Aptitude": [
		"Number Systems & HCF/LCM", "Percentages & Profit/Loss", "Ratio & Proportion",
		"Time, Speed & Distance", "Simple & Compound Interest", "Data Interpretation (Charts, Graphs)",
		"Averages & Mixtures", "Permutations & Combinations", "Probability",
	],
	"Logical Reasoning": [
		"Coding & Decoding", "Blood Relations", "Direction Sense", "Syllogisms",
		"Seating Arrangements", "Number & Letter Series", "Analogies & Classification",
		"Statement & Assumptions/Conclusions", "Logical Puzzles",
	],
	"Verbal Ability": [
		"Reading Comprehension Passages", "Vocabulary (Synonyms, Antonyms, Idioms)",
		"Grammar (Tenses, Articles, Prepositions)", "Sentence Correction & Completion",
		"Para Jumbles & Cloze Tests", "Verbal Analogies", "Critical Reasoning (Verbal)",
	],
}

INTERVIEW_TYPES = ["Behavioral", "Technical - General", "Technical - JavaScript", "Technical - Python", "Case Study"]

TECHNICAL_MODULES = [
	{"id": "javascript-basics", "title": "JavaScript Fundamentals", "difficulty": "Beginner", "language": "javascript"},
	{"id": "python-core", "title": "Python Core Concepts", "difficulty": "Beginner", "language": "python"},
	{"id": "react-state-props", "title": "React: State & Props", "difficulty": "Intermediate", "language": "javascript"},
	{"id": "sql-select-joins", "title": "SQL: SELECT & JOINs", "difficulty": "Beginner", "language": "sql"},
	{"id": "arrays-strings", "title": "Arrays & Strings", "difficulty": "Beginner", "language": "generic"},
	{"id": "linked-lists", "title": "Linked Lists", "difficulty": "Intermediate", "language": "generic"},
	{"id": "stacks-queues", "title": "Stacks & Queues", "difficulty": "Intermediate", "language": "generic"},
	{"id": "hash-tables", "title": "Hash Tables (Dictionaries/Maps)", "difficulty": "Intermediate", "language": "generic"},
	{"id": "trees", "title": "Trees (Binary, BST, Tries)", "difficulty": "Advanced", "language": "generic"},
	{"id": "graphs", "title": "Graphs", "difficulty": "Advanced", "language": "generic"},
	{"id": "heaps", "title": "Heaps (Priority Queues)", "difficulty": "Advanced", "language": "generic"},
]


def as_dict() -> dict:
	return {
		"soft_skill_topics": SOFT_SKILL_TOPICS,
		"aptitude_sections": [{"aptitude_type": k, "topics": v} for k, v in APTITUDE_SECTIONS.items()],
		"interview_types": INTERVIEW_TYPES,
		"technical_modules": TECHNICAL_MODULES,
	}
