"""Keyword tables and community mappings used by the classifiers.

The tables are plain configuration data. List order is priority order: the
classifiers return the first category whose keywords match, so more specific
categories are listed before broader ones. ``Taxonomy.default()`` builds the
bundled tables once; ``Taxonomy.from_yaml()`` loads a replacement file with the
same layout.
"""

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

from idea_insight.core.entities import GENERAL


DEFAULT_TAXONOMY_DATA: dict[str, Any] = {
    "domains": [
        {
            "name": "mental_wellness",
            "label": "Mental Health & Wellness",
            "keywords": [
                "meditation", "meditate", "mindfulness", "mindful", "mental health",
                "mental", "therapy", "stress", "anxiety", "depression", "calm", "relax",
                "relaxation", "wellbeing", "well-being", "burnout", "sleep", "insomnia",
                "journaling",
            ],
            "communities": ["Meditation", "mindfulness", "mentalhealth", "selfimprovement"],
            "variants": [
                {
                    "triggers": ["therapy", "therapist", "anxiety", "depression", "mental"],
                    "communities": ["mentalhealth", "Anxiety", "depression", "therapy"],
                },
                {
                    "triggers": ["sleep", "insomnia"],
                    "communities": ["sleep", "insomnia", "Meditation"],
                },
            ],
        },
        {
            "name": "pets",
            "label": "Pets & Animal Care",
            "keywords": [
                "pet", "pets", "cat", "cats", "kitten", "kittens", "dog", "dogs", "puppy",
                "puppies", "animal", "animals", "veterinary", "vet", "vets", "leash",
                "collar",
            ],
            "communities": ["pets", "dogs", "cats", "AskVet"],
            "variants": [
                {
                    "triggers": ["cat", "cats", "kitten", "kittens"],
                    "communities": ["cats", "CatAdvice", "cattraining"],
                },
                {
                    "triggers": ["dog", "dogs", "puppy", "puppies"],
                    "communities": ["dogs", "DogTraining", "puppy101"],
                },
            ],
        },
        {
            "name": "plants",
            "label": "Plants & Gardening",
            "keywords": [
                "plant", "plants", "houseplant", "houseplants", "garden", "gardens",
                "gardening", "gardener", "gardeners", "soil", "seeds",
            ],
            "communities": ["plants", "plantclinic", "whatsthisplant"],
            "variants": [
                {
                    "triggers": ["houseplant", "houseplants", "indoor"],
                    "communities": ["houseplants", "IndoorGarden", "plantclinic"],
                },
                {
                    "triggers": ["garden", "gardening", "outdoor", "vegetable", "vegetables"],
                    "communities": ["gardening", "vegetablegardening", "landscaping"],
                },
            ],
        },
        {
            "name": "crypto",
            "label": "Crypto & Blockchain",
            "keywords": [
                "crypto", "cryptocurrency", "cryptocurrencies", "bitcoin", "ethereum",
                "blockchain", "defi", "nft", "nfts", "web3",
            ],
            "communities": ["CryptoCurrency", "CryptoTechnology", "CryptoMarkets", "Bitcoin"],
            "variants": [
                {
                    "triggers": ["bitcoin"],
                    "communities": ["Bitcoin", "BitcoinBeginners", "CryptoCurrency"],
                },
                {
                    "triggers": ["ethereum", "defi"],
                    "communities": ["ethereum", "defi", "CryptoCurrency"],
                },
            ],
        },
        {
            "name": "finance",
            "label": "Personal Finance & Fintech",
            "keywords": [
                "finance", "financial", "fintech", "money", "bank", "banking",
                "budgeting", "tax", "taxes", "invest", "investing", "investment",
                "investments", "portfolio", "trading", "stock", "stocks", "accounting",
                "bookkeeping", "invoice", "invoicing", "savings", "loan", "loans",
                "insurance",
            ],
            "communities": ["personalfinance", "financialindependence", "Frugal", "budget"],
            "variants": [
                {
                    "triggers": [
                        "invest", "investing", "investment", "investments", "portfolio",
                        "stock", "stocks", "trading",
                    ],
                    "communities": ["investing", "stocks", "SecurityAnalysis", "ValueInvesting"],
                },
                {
                    "triggers": ["tax", "taxes", "accounting", "bookkeeping", "invoice", "invoicing"],
                    "communities": ["Accounting", "tax", "Bookkeeping", "smallbusiness"],
                },
            ],
        },
        {
            "name": "real_estate",
            "label": "Real Estate",
            "keywords": [
                "real estate", "realestate", "real-estate", "property", "properties",
                "landlord", "landlords", "tenant", "tenants", "mortgage", "rent",
                "rental", "rentals",
            ],
            "communities": ["RealEstate", "realestateinvesting", "FirstTimeHomeBuyer", "Landlord"],
            "variants": [
                {
                    "triggers": ["landlord", "landlords", "tenant", "tenants", "rent", "rental", "rentals"],
                    "communities": ["Landlord", "PropertyManagement", "realestateinvesting", "RealEstate"],
                },
            ],
        },
        {
            "name": "health",
            "label": "Healthcare",
            "keywords": [
                "health", "healthcare", "health care", "medical", "medicine",
                "medication", "medications", "doctor", "doctors", "patient", "patients",
                "clinic", "hospital", "symptom", "symptoms", "diagnosis", "disease",
                "dementia", "pharmacy", "pharmaceutical",
            ],
            "communities": ["Health", "AskDocs", "medicine", "healthcare"],
            "variants": [
                {
                    "triggers": ["medication", "medications", "pharmacy", "pharmaceutical"],
                    "communities": ["medicine", "pharmacy", "AskDocs", "healthcare"],
                },
            ],
        },
        {
            "name": "fitness",
            "label": "Fitness",
            "keywords": [
                "fitness", "exercise", "exercises", "workout", "workouts", "gym", "gyms",
                "muscle", "bodybuilding", "bodybuilder", "bodybuilders", "weightlifting",
                "running", "runner", "runners", "yoga", "athlete", "athletes",
                "personal trainer", "strength training",
            ],
            "communities": ["fitness", "bodyweightfitness", "loseit", "homegym"],
            "variants": [
                {
                    "triggers": ["running", "runner", "runners"],
                    "communities": ["running", "C25K", "AdvancedRunning"],
                },
                {
                    "triggers": ["yoga"],
                    "communities": ["yoga", "flexibility", "fitness"],
                },
                {
                    "triggers": ["bodybuilding", "bodybuilder", "bodybuilders", "weightlifting", "muscle"],
                    "communities": ["bodybuilding", "weightroom", "naturalbodybuilding"],
                },
            ],
        },
        {
            "name": "food",
            "label": "Food & Beverage",
            "keywords": [
                "food", "foods", "restaurant", "restaurants", "cooking", "cook", "recipe",
                "recipes", "meal", "meals", "meal prep", "nutrition", "diet", "chef",
                "chefs", "kitchen", "grocery", "groceries", "dining",
            ],
            "communities": ["food", "nutrition", "HealthyFood", "EatCheapAndHealthy"],
            "variants": [
                {
                    "triggers": ["restaurant", "restaurants", "chef", "chefs", "kitchen"],
                    "communities": ["KitchenConfidential", "restaurateur", "Chefit"],
                },
                {
                    "triggers": ["recipe", "recipes", "cooking", "cook", "meal", "meals"],
                    "communities": ["recipes", "Cooking", "MealPrepSunday"],
                },
            ],
        },
        {
            "name": "education",
            "label": "Education",
            "keywords": [
                "education", "educational", "edtech", "learn", "study", "studying",
                "student", "students", "teacher", "teachers", "teaching", "tutor",
                "tutors", "tutoring", "course", "courses", "school", "schools", "exam",
                "exams", "homework", "classroom", "lecture", "lectures", "flashcard",
                "flashcards", "note", "notes", "note-taking", "notetaking",
                "language learning", "online learning", "e-learning", "elearning",
            ],
            "communities": ["education", "studytips", "GetStudying", "Teachers"],
            "variants": [
                {
                    "triggers": ["programming", "coding", "code", "developer", "developers"],
                    "communities": ["learnprogramming", "cscareerquestions", "codingbootcamp"],
                },
                {
                    "triggers": ["language", "languages"],
                    "communities": ["languagelearning", "Spanish", "French"],
                },
                {
                    "triggers": ["notetaking", "note", "notes", "lecture", "lectures"],
                    "communities": ["GetStudying", "studytips", "NoteTaking", "education"],
                },
            ],
        },
        {
            "name": "music",
            "label": "Music",
            "keywords": [
                "music", "musical", "musician", "musicians", "song", "songs",
                "songwriting", "instrument", "instruments", "band", "bands", "concert",
                "concerts", "guitar", "piano", "drums", "composition", "composer",
            ],
            "communities": ["WeAreTheMusicMakers", "musicians", "edmproduction", "musicproduction"],
            "variants": [
                {
                    "triggers": ["piano"],
                    "communities": ["piano", "WeAreTheMusicMakers", "musictheory"],
                },
                {
                    "triggers": ["guitar"],
                    "communities": ["Guitar", "WeAreTheMusicMakers", "guitarlessons"],
                },
            ],
        },
        {
            "name": "art",
            "label": "Art & Creative",
            "keywords": [
                "art", "arts", "artist", "artists", "artwork", "painting", "paintings",
                "drawing", "illustration", "illustrator", "gallery", "sculpture",
                "craft", "crafts", "digital art",
            ],
            "communities": ["Art", "learnart", "ArtistLounge", "ArtCrit"],
        },
        {
            "name": "gaming",
            "label": "Gaming",
            "keywords": [
                "game", "games", "gaming", "gamer", "gamers", "esports", "videogame",
                "video game", "video games", "twitch", "console", "tournament",
                "tournaments",
            ],
            "communities": ["gaming", "gamedev", "IndieGaming", "pcgaming"],
            "variants": [
                {
                    "triggers": ["indie", "gamedev"],
                    "communities": ["gamedev", "IndieGaming", "IndieDev"],
                },
            ],
        },
        {
            "name": "productivity",
            "label": "Productivity & Work",
            "keywords": [
                "productivity", "productive", "task", "tasks", "todo", "to-do",
                "project management", "note", "notes", "calendar", "schedule",
                "scheduling", "meeting", "meetings", "habit", "habits", "focus",
                "time tracking", "workflow", "workflows", "remote", "coworking",
                "collaboration", "workplace",
            ],
            "communities": ["productivity", "GetMotivated", "getdisciplined", "selfimprovement"],
            "variants": [
                {
                    "triggers": ["remote", "coworking", "virtual"],
                    "communities": ["remotework", "digitalnomad", "WorkFromHome"],
                },
                {
                    "triggers": ["task", "tasks", "project", "todo"],
                    "communities": ["productivity", "projectmanagement", "gtd"],
                },
            ],
        },
        {
            "name": "travel",
            "label": "Travel",
            "keywords": [
                "travel", "traveling", "travelling", "traveler", "travelers", "trip",
                "trips", "vacation", "vacations", "hotel", "hotels", "flight", "flights",
                "tourism", "tourist", "backpacking",
            ],
            "communities": ["travel", "solotravel", "backpacking", "digitalnomad"],
        },
        {
            "name": "home",
            "label": "Home & Living",
            "keywords": [
                "home improvement", "smart home", "house", "household", "homeowner",
                "homeowners", "furniture", "cleaning", "renovation", "repair",
                "repairs", "interior design", "diy",
            ],
            "communities": ["HomeImprovement", "organization", "InteriorDesign", "DIY"],
            "variants": [
                {
                    "triggers": ["smart"],
                    "communities": ["smarthome", "HomeAutomation", "homeassistant"],
                },
                {
                    "triggers": ["cleaning", "clean"],
                    "communities": ["CleaningTips", "organization", "HomeImprovement"],
                },
            ],
        },
        {
            "name": "ecommerce",
            "label": "E-commerce",
            "keywords": [
                "ecommerce", "e-commerce", "online store", "shop", "shops", "shopify",
                "dropshipping", "marketplace", "retail", "merchant", "merchants",
                "seller", "sellers",
            ],
            "communities": ["ecommerce", "shopify", "dropship", "Entrepreneur"],
        },
        {
            "name": "marketing",
            "label": "Marketing & Advertising",
            "keywords": [
                "marketing", "advertising", "ads", "seo", "influencer", "influencers",
                "campaign", "campaigns", "branding", "brand", "social media",
                "newsletter", "lead generation",
            ],
            "communities": ["marketing", "DigitalMarketing", "SEO", "socialmedia"],
            "variants": [
                {
                    "triggers": ["seo"],
                    "communities": ["SEO", "bigseo", "marketing"],
                },
            ],
        },
        {
            "name": "social",
            "label": "Social & Community",
            "keywords": [
                "social", "social network", "community", "communities", "friend",
                "friends", "friendship", "dating", "relationship", "relationships",
                "networking", "introvert", "introverts", "introverted", "neighbors",
            ],
            "communities": ["socialskills", "MakeNewFriendsHere", "relationship_advice", "CasualConversation"],
            "variants": [
                {
                    "triggers": ["dating"],
                    "communities": ["dating", "dating_advice", "OnlineDating"],
                },
            ],
        },
        {
            "name": "technology",
            "label": "Technology",
            "keywords": [
                "technology", "tech", "software", "saas", "ai", "artificial intelligence",
                "machine learning", "programming", "coding", "developer", "developers",
                "api", "apis", "cloud", "automation", "analytics", "cybersecurity",
                "chatbot", "gpt", "llm",
            ],
            "communities": ["technology", "programming", "SaaS", "webdev"],
            "variants": [
                {
                    "triggers": ["ai", "artificial", "gpt", "llm", "chatbot", "machine"],
                    "communities": ["artificial", "MachineLearning", "ChatGPT", "singularity"],
                },
            ],
        },
    ],
    "audiences": [
        {
            "name": "seniors",
            "keywords": [
                "senior", "seniors", "elderly", "older adults", "aging", "retiree",
                "retirees", "retirement", "grandparent", "grandparents", "caregiver",
                "caregivers", "dementia",
            ],
            "communities": ["AgingParents", "CaregiverSupport", "eldercare", "dementia"],
        },
        {
            "name": "parents",
            "keywords": [
                "parent", "parents", "parenting", "mom", "moms", "mother", "mothers",
                "dad", "dads", "father", "fathers", "baby", "babies", "toddler",
                "toddlers", "kids", "child", "children", "family", "families", "newborn",
            ],
            "communities": ["Parenting", "Mommit", "daddit", "NewParents"],
        },
        {
            "name": "students",
            "keywords": [
                "student", "students", "college", "university", "universities",
                "undergrad", "undergrads", "high school", "exam", "exams", "homework",
                "campus",
            ],
            "communities": ["college", "GetStudying", "university", "StudentLoans"],
        },
        {
            "name": "medical",
            "keywords": [
                "doctor", "doctors", "nurse", "nurses", "physician", "physicians",
                "clinician", "clinicians", "healthcare workers", "hospital",
                "hospitals", "clinic", "clinics", "therapist", "therapists",
                "patient", "patients",
            ],
            "communities": ["medicine", "nursing", "healthcare", "medicalschool"],
        },
        {
            "name": "developers",
            "keywords": [
                "developer", "developers", "programmer", "programmers", "coder",
                "coders", "engineer", "engineers", "software engineers", "devops",
            ],
            "communities": ["programming", "webdev", "cscareerquestions", "learnprogramming"],
        },
        {
            "name": "artists",
            "keywords": [
                "artist", "artists", "creative", "creatives", "creator", "creators",
                "designer", "designers", "musician", "musicians", "writer", "writers",
                "photographer", "photographers", "painter", "painters", "illustrator",
                "illustrators", "maker", "makers",
            ],
            "communities": ["ArtistLounge", "Art", "WeAreTheMusicMakers", "photography"],
        },
        {
            "name": "gamers",
            "keywords": [
                "gamer", "gamers", "player", "players", "streamer", "streamers",
                "esports",
            ],
            "communities": ["gaming", "truegaming", "pcgaming", "GameDev"],
        },
        {
            "name": "athletes",
            "keywords": [
                "athlete", "athletes", "bodybuilder", "bodybuilders", "runner",
                "runners", "cyclist", "cyclists", "weightlifter", "weightlifters",
                "gym-goers", "trainer", "trainers",
            ],
            "communities": ["Fitness", "running", "weightroom", "bodybuilding"],
        },
        {
            "name": "entrepreneurs",
            "keywords": [
                "entrepreneur", "entrepreneurs", "founder", "founders", "startup",
                "startups", "small business", "small businesses", "business owners",
                "solopreneur", "solopreneurs", "investor", "investors",
            ],
            "communities": ["Entrepreneur", "startups", "smallbusiness", "business"],
        },
        {
            "name": "professionals",
            "keywords": [
                "professional", "professionals", "manager", "managers", "executive",
                "executives", "consultant", "consultants", "freelancer", "freelancers",
                "freelance", "employees", "remote workers", "teams", "office workers",
                "company", "companies",
            ],
            "communities": ["careerguidance", "jobs", "freelance", "consulting"],
        },
    ],
    "solution_types": [
        {
            "name": "hardware",
            "keywords": [
                "hardware", "device", "devices", "sensor", "sensors", "wearable",
                "wearables", "iot", "gadget", "gadgets", "smart home", "collar",
                "robot", "robots", "robotics", "drone", "drones",
            ],
            "communities": ["hardware", "arduino", "raspberry_pi", "electronics"],
        },
        {
            "name": "mobile_app",
            "keywords": [
                "app", "apps", "mobile", "mobile app", "smartphone", "iphone", "ios",
                "android",
            ],
            "communities": ["AppIdeas", "androiddev", "iOSProgramming", "reactnative"],
        },
        {
            "name": "web_platform",
            "keywords": [
                "web", "website", "websites", "platform", "platforms", "web app",
                "saas", "dashboard", "portal", "browser extension", "chrome extension",
                "online tool",
            ],
            "communities": ["SaaS", "webdev", "indiehackers", "startups"],
        },
        {
            "name": "ai_solution",
            "keywords": [
                "ai", "artificial intelligence", "machine learning", "ml", "gpt",
                "llm", "chatbot", "neural", "deep learning", "automation", "automated",
            ],
            "communities": ["artificial", "MachineLearning", "ChatGPT", "deeplearning"],
        },
        {
            "name": "marketplace",
            "keywords": [
                "marketplace", "marketplaces", "two-sided", "peer-to-peer", "p2p",
            ],
            "communities": ["ecommerce", "Entrepreneur", "sharingeconomy", "startups"],
        },
        {
            "name": "service",
            "keywords": [
                "service", "services", "consulting", "coaching", "agency", "delivery",
                "concierge", "subscription box",
            ],
            "communities": ["consulting", "freelance", "smallbusiness", "Entrepreneur"],
        },
    ],
    "fallback_communities": ["Entrepreneur", "startups", "smallbusiness", "SideProject"],
}


@dataclass(frozen=True)
class CategoryRule:
    """Category with its trigger keywords and communities."""

    name: str
    keywords: frozenset[str]
    communities: tuple[str, ...] = ()
    label: str = ""


@dataclass(frozen=True)
class CommunityVariant:
    """Token-triggered community list inside a domain."""

    triggers: frozenset[str]
    communities: tuple[str, ...]


@dataclass(frozen=True)
class Taxonomy:
    """Ordered, immutable keyword tables for all classification dimensions."""

    domains: tuple[CategoryRule, ...]
    audiences: tuple[CategoryRule, ...]
    solution_types: tuple[CategoryRule, ...]
    domain_variants: Mapping[str, tuple[CommunityVariant, ...]]
    fallback_communities: tuple[str, ...]

    @classmethod
    def default(cls) -> "Taxonomy":
        """Build the bundled taxonomy."""
        return cls.from_mapping(DEFAULT_TAXONOMY_DATA)

    @classmethod
    def from_yaml(cls, path: Path) -> "Taxonomy":
        """Load a taxonomy from a YAML file with the bundled layout."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_mapping(data)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Taxonomy":
        """Build a taxonomy from plain data, validating the layout."""
        domains = _parse_rules(data, "domains")
        audiences = _parse_rules(data, "audiences")
        solution_types = _parse_rules(data, "solution_types")

        variants: dict[str, tuple[CommunityVariant, ...]] = {}
        for entry in data.get("domains", []):
            variants[entry["name"]] = tuple(
                CommunityVariant(
                    triggers=frozenset(str(t).lower() for t in variant.get("triggers", [])),
                    communities=tuple(variant.get("communities", [])),
                )
                for variant in entry.get("variants", [])
            )

        fallback = tuple(data.get("fallback_communities", []))
        if len(fallback) < 4:
            raise ValueError("Taxonomy needs at least 4 fallback communities")

        return cls(
            domains=domains,
            audiences=audiences,
            solution_types=solution_types,
            domain_variants=MappingProxyType(variants),
            fallback_communities=fallback,
        )

    def domain_communities(self, domain: str, tokens: tuple[str, ...]) -> tuple[str, ...]:
        """Communities for a domain, refined by the idea tokens."""
        rule = _find(self.domains, domain)
        if rule is None:
            return ()
        token_set = set(tokens)
        for variant in self.domain_variants.get(domain, ()):
            if variant.triggers & token_set:
                return variant.communities
        return rule.communities

    def audience_communities(self, audience: str) -> tuple[str, ...]:
        rule = _find(self.audiences, audience)
        return rule.communities if rule else ()

    def solution_communities(self, solution_type: str) -> tuple[str, ...]:
        rule = _find(self.solution_types, solution_type)
        return rule.communities if rule else ()

    def domain_label(self, domain: str) -> str:
        """Human-readable industry label for a domain."""
        rule = _find(self.domains, domain)
        if rule is None or domain == GENERAL:
            return "General Business"
        return rule.label or domain.replace("_", " ").title()


def _parse_rules(data: Mapping[str, Any], key: str) -> tuple[CategoryRule, ...]:
    rules = []
    seen: set[str] = set()
    for entry in data.get(key, []):
        name = str(entry["name"])
        if name == GENERAL:
            raise ValueError(f"'{GENERAL}' is reserved and cannot be a {key} category")
        if name in seen:
            raise ValueError(f"Duplicate {key} category: {name}")
        seen.add(name)
        rules.append(
            CategoryRule(
                name=name,
                keywords=frozenset(str(k).lower() for k in entry.get("keywords", [])),
                communities=tuple(entry.get("communities", [])),
                label=str(entry.get("label", "")),
            )
        )
    return tuple(rules)


def _find(rules: tuple[CategoryRule, ...], name: str) -> CategoryRule | None:
    return next((rule for rule in rules if rule.name == name), None)
