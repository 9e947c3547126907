"""Food Catalog - Built-in table of common foods.

Values are per portion; micronutrients are in mg.
"""

from datetime import date, datetime

from .models import CatalogFood, FoodItem, MealType, Micronutrients


def _food(name, portion, calories, protein, carbs, fat, vitamin_c, iron, calcium, potassium, magnesium):
    return CatalogFood(
        name=name,
        portion=portion,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        micronutrients=Micronutrients(
            vitamin_c=vitamin_c, iron=iron, calcium=calcium, potassium=potassium, magnesium=magnesium
        ),
    )


FOOD_CATALOG: tuple[CatalogFood, ...] = (
    _food("Arroz Branco Cozido", "100g", 128, 2.5, 28, 0.2, 0, 0.2, 10, 35, 12),
    _food("Feijão Carioca Cozido", "100g", 76, 4.8, 13.6, 0.5, 0, 1.5, 27, 250, 40),
    _food("Peito de Frango Grelhado", "100g", 165, 31, 0, 3.6, 0, 1, 15, 256, 29),
    _food("Ovo Cozido", "1 unidade", 70, 6, 0.5, 5, 0, 0.6, 25, 60, 6),
    _food("Pão Francês", "1 unidade (50g)", 135, 4, 28, 0, 0, 1.5, 10, 50, 10),
    _food("Banana Prata", "1 unidade", 60, 1, 15, 0, 8, 0.3, 5, 358, 27),
    _food("Maçã", "1 unidade", 52, 0.3, 14, 0.2, 4.6, 0.1, 6, 107, 5),
    _food("Café com Leite (Sem açúcar)", "200ml", 60, 3, 5, 3, 0, 0, 100, 130, 10),
    _food("Tapioca (Goma)", "100g", 336, 0, 83, 0, 0, 0, 0, 0, 0),
    _food("Cuscuz de Milho", "100g", 112, 3.8, 23, 0.7, 0, 0.6, 2, 80, 30),
    _food("Batata Doce Cozida", "100g", 86, 1.6, 20, 0.1, 2, 0.5, 30, 337, 25),
    _food("Salada de Alface e Tomate", "Prato sobremesa", 25, 1, 5, 0, 15, 0.5, 20, 150, 10),
    _food("Chocolate ao Leite", "25g (4 quadradinhos)", 135, 2, 15, 8, 0, 0.5, 50, 90, 15),
    _food("Aveia em Flocos", "30g (2 colheres)", 115, 4, 17, 2, 0, 1.3, 15, 100, 40),
    _food("Whey Protein", "30g (1 scoop)", 120, 24, 3, 1, 0, 0, 100, 150, 0),
)


def search_foods(query: str, catalog: tuple[CatalogFood, ...] = FOOD_CATALOG) -> list[CatalogFood]:
    """Case-insensitive substring match on food names."""
    query_lower = query.lower()
    return [food for food in catalog if query_lower in food.name.lower()]


def food_item_from_catalog(
    food: CatalogFood, meal_type: MealType, on_date: date, now: datetime
) -> FoodItem:
    """Turn a catalog row into a loggable entry."""
    return FoodItem(
        name=food.name,
        calories=food.calories,
        protein=food.protein,
        carbs=food.carbs,
        fat=food.fat,
        portion=food.portion,
        meal_type=meal_type,
        date=on_date,
        timestamp=now,
        micronutrients=food.micronutrients.model_copy(),
    )
