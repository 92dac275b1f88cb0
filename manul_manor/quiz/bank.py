"""Question bank for the weekly Manul Monday quiz."""

from typing import List

from pydantic import BaseModel

from manul_manor.models.quiz import QuizQuestion


class QuizTheme(BaseModel):
    title: str
    questions: List[QuizQuestion]


DEFAULT_THEMES: List[QuizTheme] = [
    QuizTheme(
        title="Manul Monday: Habitat & Survival",
        questions=[
            QuizQuestion(
                prompt="Where do Pallas cats (manuls) primarily live?",
                options=["Tropical rainforests", "Central Asian steppes", "Arctic tundra", "African savannas"],
                correct_index=1,
                explanation="Pallas cats live in the cold, rocky steppes of Central Asia, "
                            "including Mongolia, China, and parts of Russia.",
            ),
            QuizQuestion(
                prompt="Why do Pallas cats have such thick fur?",
                options=["For camouflage", "To survive freezing temperatures",
                         "To appear larger to predators", "For underwater swimming"],
                correct_index=1,
                explanation="Their extremely thick fur helps them survive harsh, cold "
                            "environments where temperatures drop well below freezing.",
            ),
            QuizQuestion(
                prompt="What conservation status are Pallas cats currently listed as?",
                options=["Least Concern", "Near Threatened", "Endangered", "Critically Endangered"],
                correct_index=1,
                explanation="Pallas cats are listed as Near Threatened on the IUCN Red List "
                            "due to habitat loss and hunting.",
            ),
        ],
    ),
    QuizTheme(
        title="Manul Monday: Diet & Hunting",
        questions=[
            QuizQuestion(
                prompt="Which animal makes up a large part of a Pallas cat's diet?",
                options=["Pikas", "Fish", "Deer", "Lizards"],
                correct_index=0,
                explanation="Pikas are small mammals common on the steppe and are a staple prey.",
            ),
            QuizQuestion(
                prompt="How do Pallas cats usually hunt?",
                options=["High-speed chases", "Ambush and stalking", "Hunting in packs", "Fishing in rivers"],
                correct_index=1,
                explanation="They are slow runners, so they rely on stalking and ambushing "
                            "prey near burrows and rocks.",
            ),
            QuizQuestion(
                prompt="When are Pallas cats most active?",
                options=["Midday", "Dawn and dusk", "Only at night", "Only in winter"],
                correct_index=1,
                explanation="Pallas cats are crepuscular, hunting mostly around dawn and dusk.",
            ),
        ],
    ),
    QuizTheme(
        title="Manul Monday: Body & Behavior",
        questions=[
            QuizQuestion(
                prompt="What shape are a Pallas cat's pupils?",
                options=["Vertical slits", "Round", "Horizontal bars", "Oval"],
                correct_index=1,
                explanation="Unlike most small cats, manuls have round pupils.",
            ),
            QuizQuestion(
                prompt="Roughly how big is an adult Pallas cat?",
                options=["About the size of a house cat", "About the size of a lynx",
                         "About the size of a leopard", "Smaller than a squirrel"],
                correct_index=0,
                explanation="Manuls are about the size of a domestic cat; their fur makes "
                            "them look bigger.",
            ),
            QuizQuestion(
                prompt="Where do Pallas cats often shelter during the day?",
                options=["In trees", "In rock crevices and old burrows", "In rivers", "In open grassland"],
                correct_index=1,
                explanation="They rest in rock crevices, caves and burrows dug by marmots "
                            "or other animals.",
            ),
        ],
    ),
]
