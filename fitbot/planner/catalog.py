"""Rule tables for plan generation.

Pure data: labels for form options, the exercise block added for each
piece of equipment, meal lines per goal and diet, and the weekly
focus/duration tables.
"""

from __future__ import annotations

from fitbot.schemas.plan import ActivityLevel, DietPreference, Equipment, Goal

EQUIPMENT_LABELS: dict[Equipment, str] = {
    Equipment.BODYWEIGHT: "Bodyweight Only",
    Equipment.DUMBBELLS: "Dumbbells",
    Equipment.BARBELL: "Barbell & Plates",
    Equipment.KETTLEBELL: "Kettlebells",
    Equipment.RESISTANCE_BANDS: "Resistance Bands",
    Equipment.PULL_UP_BAR: "Pull-up Bar",
    Equipment.TREADMILL: "Treadmill",
    Equipment.STATIONARY_BIKE: "Stationary Bike",
    Equipment.ROWING_MACHINE: "Rowing Machine",
    Equipment.CABLE_MACHINE: "Cable Machine",
    Equipment.BENCH: "Workout Bench",
    Equipment.YOGA_MAT: "Yoga Mat",
    Equipment.MEDICINE_BALL: "Medicine Ball",
    Equipment.JUMP_ROPE: "Jump Rope",
    Equipment.FOAM_ROLLER: "Foam Roller",
}

DIET_LABELS: dict[DietPreference, str] = {
    DietPreference.VEG: "Vegetarian",
    DietPreference.NONVEG: "Non-Vegetarian",
    DietPreference.VEGAN: "Vegan",
    DietPreference.KETO: "Keto",
    DietPreference.PALEO: "Paleo",
}

# Bodyweight block; also used when no equipment is selected
BODYWEIGHT_EXERCISES: list[str] = [
    "Push-Ups (3x15)",
    "Bodyweight Squats (3x20)",
    "Planks (3x45s)",
    "Lunges (3x12 each)",
    "Mountain Climbers (3x30s)",
]

# Insertion order is the order blocks are added to a plan.
# Foam roller has no block of its own.
EQUIPMENT_EXERCISES: dict[Equipment, list[str]] = {
    Equipment.DUMBBELLS: [
        "Dumbbell Bench Press (4x10)",
        "Dumbbell Shoulder Press (3x12)",
        "Dumbbell Bicep Curls (3x12)",
        "Dumbbell Rows (3x10)",
        "Goblet Squats (3x12)",
    ],
    Equipment.BARBELL: [
        "Barbell Deadlift (4x6)",
        "Barbell Squats (4x8)",
        "Barbell Bench Press (4x8)",
        "Barbell Rows (4x8)",
        "Overhead Press (3x10)",
    ],
    Equipment.KETTLEBELL: [
        "Kettlebell Swings (4x15)",
        "Goblet Squats (3x12)",
        "Turkish Get-Ups (2x5 each)",
        "Kettlebell Clean & Press (3x10)",
    ],
    Equipment.RESISTANCE_BANDS: [
        "Banded Rows (3x15)",
        "Banded Squats (3x15)",
        "Banded Chest Press (3x12)",
        "Banded Face Pulls (3x15)",
        "Banded Bicep Curls (3x15)",
    ],
    Equipment.PULL_UP_BAR: [
        "Pull-Ups (3x max)",
        "Chin-Ups (3x max)",
        "Hanging Leg Raises (3x10)",
        "Dead Hangs (3x30s)",
    ],
    Equipment.TREADMILL: [
        "Treadmill Running (20-30 mins)",
        "Incline Walk (15 mins)",
        "HIIT Sprints (10x30s)",
    ],
    Equipment.STATIONARY_BIKE: [
        "Cycling Intervals (20 mins)",
        "Steady State Cycling (30 mins)",
        "HIIT Bike Sprints (15 mins)",
    ],
    Equipment.ROWING_MACHINE: [
        "Rowing Intervals (15 mins)",
        "Steady State Rowing (20 mins)",
        "500m Row Sprints (5 rounds)",
    ],
    Equipment.CABLE_MACHINE: [
        "Cable Flyes (3x12)",
        "Cable Rows (3x12)",
        "Tricep Pushdowns (3x15)",
        "Face Pulls (3x15)",
        "Cable Woodchops (3x10 each)",
    ],
    Equipment.BENCH: [
        "Incline Dumbbell Press (3x10)",
        "Step-Ups (3x12 each)",
        "Hip Thrusts (3x12)",
        "Box Jumps (3x10)",
    ],
    Equipment.YOGA_MAT: [
        "Yoga Flow (15-20 mins)",
        "Stretching Routine (10 mins)",
        "Core Work (Crunches, Leg Raises)",
        "Glute Bridges (3x15)",
    ],
    Equipment.MEDICINE_BALL: [
        "Medicine Ball Slams (3x15)",
        "Wall Balls (3x12)",
        "Russian Twists with Ball (3x20)",
        "Med Ball Push-Ups (3x10)",
    ],
    Equipment.JUMP_ROPE: [
        "Jump Rope (5 mins)",
        "Double Unders (3x30s)",
        "Jump Rope HIIT (10 mins)",
    ],
}

GOAL_EXERCISES: dict[Goal, list[str]] = {
    Goal.LOSE: ["Burpees (3x10)", "High Knees (3x45s)", "Box Jumps (3x10)"],
    Goal.GAIN: [
        "Progressive Overload Focus",
        "Compound Movements Priority",
        "Rest 2-3 mins between sets",
    ],
    Goal.MAINTAIN: [],
}

# Meal lines keyed by goal, then by diet group.
# "plant" covers both vegetarian and vegan selections.
DIET_MEALS: dict[Goal, dict[str, list[str]]] = {
    Goal.GAIN: {
        "nonveg": [
            "Breakfast: Omelette + Whole wheat bread + Milk",
            "Lunch: Brown rice + Grilled Chicken + Veggies",
        ],
        "plant": [
            "Breakfast: Paneer bhurji + Whole wheat bread",
            "Lunch: Rajma + Brown rice + Ghee",
        ],
        "keto": [
            "Breakfast: Eggs + Avocado + Cheese",
            "Lunch: Grilled meat + Leafy greens + Olive oil",
        ],
        "common": ["Snack: Dry fruits + Smoothie", "Dinner: High-protein meal + Salad"],
    },
    Goal.LOSE: {
        "nonveg": ["Breakfast: Boiled eggs + Oats", "Lunch: Grilled fish + Brown rice + Salad"],
        "plant": [
            "Breakfast: Oats + Banana + Green tea",
            "Lunch: Moong dal + Brown rice + Veggies",
        ],
        "keto": [
            "Breakfast: Eggs + Spinach + Butter",
            "Lunch: Grilled protein + Cauliflower rice",
        ],
        "common": ["Snack: Roasted chana + Buttermilk", "Dinner: Light soup + Salad"],
    },
    Goal.MAINTAIN: {
        "nonveg": [
            "Breakfast: Scrambled eggs + Fruits",
            "Lunch: Mixed dal + Chicken + Veg curry",
        ],
        "plant": ["Breakfast: Upma/Poha + Milk", "Lunch: Khichdi + Curd + Salad"],
        "keto": [],
        "common": ["Snack: Fresh fruits + Nuts", "Dinner: Balanced meal + Vegetables"],
    },
}

GOAL_ADVICE: dict[Goal, str] = {
    Goal.LOSE: "Focus on calorie deficit and daily step target (8k-10k)",
    Goal.GAIN: "Add 400-500 kcal/day; focus on protein-rich meals",
    Goal.MAINTAIN: "Maintain balance with consistent training & nutrition",
}

GENERAL_NOTES: list[str] = [
    "Stay hydrated - drink 2-3 liters of water daily",
    "Get 7-8 hours of quality sleep for recovery",
]

WEEKDAYS: list[str] = [
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
]

REST_DAYS: dict[ActivityLevel, int] = {
    ActivityLevel.LOW: 3,
    ActivityLevel.MODERATE: 2,
    ActivityLevel.HIGH: 1,
}

FOCUS_AREAS: dict[Goal, list[str]] = {
    Goal.GAIN: [
        "Chest & Triceps", "Back & Biceps", "Legs & Glutes", "Shoulders & Core",
        "Full Body", "Active Recovery", "Rest",
    ],
    Goal.LOSE: [
        "HIIT & Cardio", "Upper Body", "Lower Body & Core", "Cardio & Mobility",
        "Full Body Circuit", "Active Recovery", "Rest",
    ],
    Goal.MAINTAIN: [
        "Upper Body", "Lower Body", "Cardio & Core", "Full Body",
        "Flexibility & Mobility", "Active Recovery", "Rest",
    ],
}

DURATIONS: dict[Goal, list[str]] = {
    Goal.GAIN: [
        "45-60 mins", "45-60 mins", "50-60 mins", "40-50 mins", "45-55 mins",
        "30 mins", "Rest",
    ],
    Goal.LOSE: [
        "30-40 mins", "40-50 mins", "40-50 mins", "35-45 mins", "35-45 mins",
        "20-30 mins", "Rest",
    ],
    Goal.MAINTAIN: [
        "40-50 mins", "40-50 mins", "30-40 mins", "40-50 mins", "30 mins",
        "20-30 mins", "Rest",
    ],
}

RECOVERY_EXERCISES: list[str] = ["Light stretching", "Walking", "Foam rolling"]
