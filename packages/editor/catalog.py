"""Furniture catalogue: footprint dimensions for placed furniture.

Dimensions are metres.  The hit tester only needs :meth:`get_item`, so any
object with that method can stand in for :class:`FurnitureCatalog`.
"""

from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel


class CatalogCategory(BaseModel):
    id: str
    name: str


class CatalogItem(BaseModel):
    id: str
    name: str
    category: str
    width: float
    depth: float
    height: float
    color: str = "#888888"


class FurnitureCatalog:
    def __init__(
        self,
        items: Iterable[CatalogItem],
        categories: Iterable[CatalogCategory] = (),
    ) -> None:
        self._items = list(items)
        self._by_id = {item.id: item for item in self._items}
        self._categories = list(categories)

    def get_item(self, item_id: Optional[str]) -> Optional[CatalogItem]:
        if item_id is None:
            return None
        return self._by_id.get(item_id)

    def get_all(self) -> list[CatalogItem]:
        return list(self._items)

    def get_categories(self) -> list[CatalogCategory]:
        return list(self._categories)

    def by_category(self, category_id: str) -> list[CatalogItem]:
        return [item for item in self._items if item.category == category_id]

    def search(self, query: str | None) -> list[CatalogItem]:
        """Case-insensitive substring match on name, id and category."""
        if not query:
            return self.get_all()
        q = query.lower()
        return [
            item
            for item in self._items
            if q in item.name.lower() or q in item.id.lower() or q in item.category.lower()
        ]

    def __len__(self) -> int:
        return len(self._items)


# ── built-in catalogue ───────────────────────────────────────────────
_CATEGORIES = [
    ("sofas", "Sofas"),
    ("chairs", "Cadeiras"),
    ("tables", "Mesas"),
    ("beds", "Camas"),
    ("storage", "Armarios"),
    ("desks", "Escrivaninhas"),
    ("kitchen", "Cozinha"),
    ("bathroom", "Banheiro"),
    ("lighting", "Iluminacao"),
    ("electronics", "Eletronicos"),
    ("outdoor", "Externo"),
    ("decor", "Decoracao"),
    ("office", "Escritorio"),
    ("laundry", "Lavanderia"),
    ("doors", "Portas"),
    ("appliances", "Eletrodomesticos"),
    ("plants", "Plantas"),
]

# (id, name, category, width, depth, height, color)
_ITEMS = [
    ("sofa-2seat", "Sofa 2 lugares", "sofas", 1.6, 0.85, 0.85, "#8B7355"),
    ("sofa-3seat", "Sofa 3 lugares", "sofas", 2.2, 0.85, 0.85, "#8B7355"),
    ("sofa-l", "Sofa L", "sofas", 2.4, 2.4, 0.85, "#6B5B45"),
    ("sofa-corner", "Sofa de canto", "sofas", 2.6, 1.6, 0.85, "#7B6B55"),
    ("loveseat", "Namoradeira", "sofas", 1.4, 0.8, 0.8, "#9B8B75"),
    ("chaise", "Chaise longue", "sofas", 1.7, 0.7, 0.75, "#8B7B65"),
    ("futon", "Futon", "sofas", 1.9, 0.9, 0.45, "#5B4B35"),
    ("daybed", "Daybed", "sofas", 2.0, 0.85, 0.65, "#A0907A"),
    ("recliner", "Poltrona reclinavel", "sofas", 0.85, 0.9, 1.0, "#6B4B35"),
    ("ottoman", "Pufe", "sofas", 0.6, 0.6, 0.45, "#8B7B65"),
    ("chair-dining", "Cadeira jantar", "chairs", 0.45, 0.45, 0.9, "#A08060"),
    ("chair-arm", "Poltrona", "chairs", 0.7, 0.7, 0.9, "#7B6B55"),
    ("chair-office", "Cadeira escritorio", "chairs", 0.6, 0.6, 1.1, "#333333"),
    ("stool-bar", "Banqueta alta", "chairs", 0.4, 0.4, 0.75, "#555555"),
    ("stool-low", "Banqueta baixa", "chairs", 0.35, 0.35, 0.45, "#A08060"),
    ("bench-dining", "Banco jantar", "chairs", 1.2, 0.35, 0.45, "#A08060"),
    ("bench-entry", "Banco entrada", "chairs", 1.0, 0.4, 0.5, "#7B6B55"),
    ("rocker", "Cadeira de balanco", "chairs", 0.6, 0.8, 1.1, "#A08060"),
    ("bean-bag", "Puff grande", "chairs", 0.8, 0.8, 0.7, "#CC4444"),
    ("folding-chair", "Cadeira dobravel", "chairs", 0.45, 0.45, 0.8, "#888888"),
    ("table-dining-4", "Mesa jantar 4 lug", "tables", 1.2, 0.8, 0.76, "#A08060"),
    ("table-dining-6", "Mesa jantar 6 lug", "tables", 1.6, 0.9, 0.76, "#A08060"),
    ("table-dining-8", "Mesa jantar 8 lug", "tables", 2.2, 1.0, 0.76, "#8B7050"),
    ("table-round", "Mesa redonda", "tables", 1.0, 1.0, 0.76, "#A08060"),
    ("table-coffee", "Mesa de centro", "tables", 1.1, 0.6, 0.45, "#5B4B35"),
    ("table-side", "Mesa lateral", "tables", 0.5, 0.5, 0.55, "#7B6B55"),
    ("table-console", "Aparador", "tables", 1.2, 0.35, 0.8, "#6B5B45"),
    ("table-counter", "Bancada bar", "tables", 1.5, 0.5, 1.05, "#5B4B35"),
    ("table-bedside", "Criado-mudo", "tables", 0.45, 0.4, 0.55, "#8B7B65"),
    ("table-tv", "Rack TV", "tables", 1.8, 0.45, 0.5, "#4B3B25"),
    ("table-picnic", "Mesa picnic", "tables", 1.5, 0.7, 0.76, "#A08060"),
    ("table-drop-leaf", "Mesa dobravel", "tables", 0.9, 0.6, 0.76, "#8B7050"),
    ("bed-single", "Cama solteiro", "beds", 1.0, 2.0, 0.55, "#E8E0D8"),
    ("bed-double", "Cama casal", "beds", 1.4, 2.0, 0.55, "#E8E0D8"),
    ("bed-queen", "Cama queen", "beds", 1.6, 2.0, 0.55, "#D8D0C8"),
    ("bed-king", "Cama king", "beds", 1.93, 2.03, 0.55, "#D8D0C8"),
    ("bed-bunk", "Beliche", "beds", 1.0, 2.0, 1.7, "#A08060"),
    ("crib", "Berco", "beds", 0.7, 1.3, 0.9, "#F0E8E0"),
    ("bed-sofa", "Sofa-cama", "beds", 1.8, 0.9, 0.8, "#8B7B65"),
    ("mattress", "Colchao", "beds", 1.4, 2.0, 0.25, "#F5F0EB"),
    ("wardrobe-2d", "Guarda-roupa 2P", "storage", 1.0, 0.6, 2.2, "#8B7050"),
    ("wardrobe-3d", "Guarda-roupa 3P", "storage", 1.5, 0.6, 2.2, "#7B6040"),
    ("wardrobe-sliding", "Armario portas correr", "storage", 2.0, 0.6, 2.4, "#6B5030"),
    ("bookcase", "Estante livros", "storage", 0.8, 0.3, 1.8, "#A08060"),
    ("bookcase-wide", "Estante larga", "storage", 1.5, 0.35, 1.8, "#8B7050"),
    ("shelf-wall", "Prateleira", "storage", 0.8, 0.25, 0.04, "#A08060"),
    ("chest-drawers", "Comoda", "storage", 0.8, 0.45, 0.85, "#8B7B65"),
    ("shoe-rack", "Sapateira", "storage", 0.8, 0.3, 1.0, "#7B6B55"),
    ("cabinet-tall", "Armario alto", "storage", 0.6, 0.4, 1.8, "#6B5B45"),
    ("sideboard", "Buffet", "storage", 1.4, 0.45, 0.85, "#5B4B35"),
    ("desk-standard", "Escrivaninha", "desks", 1.2, 0.6, 0.76, "#8B7050"),
    ("desk-large", "Mesa escritorio", "desks", 1.6, 0.8, 0.76, "#7B6040"),
    ("desk-l", "Mesa L", "desks", 1.6, 1.4, 0.76, "#6B5B45"),
    ("desk-standing", "Mesa regulavel", "desks", 1.4, 0.7, 1.1, "#555555"),
    ("desk-vanity", "Penteadeira", "desks", 1.0, 0.45, 0.76, "#F0E8E0"),
    ("desk-kids", "Mesa infantil", "desks", 0.8, 0.5, 0.55, "#6699CC"),
    ("fridge-single", "Geladeira", "kitchen", 0.6, 0.65, 1.7, "#E0E0E0"),
    ("fridge-double", "Geladeira duplex", "kitchen", 0.85, 0.7, 1.8, "#D0D0D0"),
    ("stove-4", "Fogao 4 bocas", "kitchen", 0.55, 0.6, 0.85, "#C0C0C0"),
    ("stove-6", "Fogao 6 bocas", "kitchen", 0.75, 0.6, 0.85, "#B0B0B0"),
    ("oven", "Forno embutido", "kitchen", 0.6, 0.55, 0.6, "#333333"),
    ("microwave", "Micro-ondas", "kitchen", 0.5, 0.4, 0.3, "#C0C0C0"),
    ("dishwasher", "Lava-louca", "kitchen", 0.6, 0.6, 0.85, "#D0D0D0"),
    ("sink-kitchen", "Pia cozinha", "kitchen", 0.8, 0.5, 0.85, "#E0E0E0"),
    ("kitchen-island", "Ilha cozinha", "kitchen", 1.5, 0.8, 0.9, "#8B7050"),
    ("pantry-cabinet", "Armario despensa", "kitchen", 0.6, 0.5, 2.0, "#A08060"),
    ("counter-section", "Bancada secao", "kitchen", 0.6, 0.6, 0.85, "#D0C8B8"),
    ("hood", "Coifa", "kitchen", 0.6, 0.5, 0.3, "#999999"),
    ("toilet", "Vaso sanitario", "bathroom", 0.4, 0.65, 0.4, "#F5F5F5"),
    ("sink-bath", "Pia banheiro", "bathroom", 0.55, 0.45, 0.85, "#F0F0F0"),
    ("sink-double", "Pia dupla", "bathroom", 1.2, 0.5, 0.85, "#F0F0F0"),
    ("bathtub", "Banheira", "bathroom", 0.75, 1.7, 0.6, "#F5F5F5"),
    ("shower", "Box chuveiro", "bathroom", 0.9, 0.9, 2.0, "#DDEEFF"),
    ("shower-rect", "Box retangular", "bathroom", 1.2, 0.8, 2.0, "#DDEEFF"),
    ("bidet", "Bide", "bathroom", 0.38, 0.6, 0.38, "#F5F5F5"),
    ("bath-cabinet", "Gabinete banheiro", "bathroom", 0.8, 0.4, 0.55, "#8B7050"),
    ("mirror-bath", "Espelho banheiro", "bathroom", 0.6, 0.05, 0.8, "#C0D0E0"),
    ("towel-rack", "Toalheiro", "bathroom", 0.6, 0.1, 0.7, "#999999"),
    ("lamp-floor", "Luminaria piso", "lighting", 0.3, 0.3, 1.6, "#FFE4B5"),
    ("lamp-table", "Abajur mesa", "lighting", 0.25, 0.25, 0.5, "#FFE4B5"),
    ("lamp-desk", "Luminaria mesa", "lighting", 0.2, 0.2, 0.45, "#888888"),
    ("chandelier", "Lustre", "lighting", 0.6, 0.6, 0.5, "#FFD700"),
    ("pendant", "Pendente", "lighting", 0.35, 0.35, 0.4, "#333333"),
    ("ceiling-fan", "Ventilador teto", "lighting", 1.2, 1.2, 0.3, "#A08060"),
    ("sconce", "Arandela", "lighting", 0.15, 0.15, 0.25, "#FFE4B5"),
    ("spot", "Spot", "lighting", 0.1, 0.1, 0.12, "#FFFFFF"),
    ("tv-50", "TV 50\"", "electronics", 1.12, 0.07, 0.65, "#222222"),
    ("tv-65", "TV 65\"", "electronics", 1.45, 0.07, 0.84, "#222222"),
    ("monitor", "Monitor", "electronics", 0.6, 0.2, 0.45, "#333333"),
    ("computer", "Gabinete PC", "electronics", 0.2, 0.45, 0.45, "#222222"),
    ("speaker-floor", "Caixa de som", "electronics", 0.3, 0.35, 0.9, "#333333"),
    ("soundbar", "Soundbar", "electronics", 0.9, 0.1, 0.07, "#222222"),
    ("printer", "Impressora", "electronics", 0.45, 0.35, 0.2, "#444444"),
    ("router", "Roteador", "electronics", 0.2, 0.15, 0.05, "#222222"),
    ("chair-garden", "Cadeira jardim", "outdoor", 0.6, 0.6, 0.85, "#2E8B57"),
    ("table-garden", "Mesa jardim", "outdoor", 1.0, 1.0, 0.72, "#A08060"),
    ("lounger", "Espreguicadeira", "outdoor", 0.7, 1.9, 0.35, "#F5F5DC"),
    ("umbrella", "Guarda-sol", "outdoor", 2.5, 2.5, 2.3, "#CD853F"),
    ("grill", "Churrasqueira", "outdoor", 1.2, 0.6, 1.0, "#444444"),
    ("hammock", "Rede", "outdoor", 1.4, 3.5, 1.3, "#8FBC8F"),
    ("swing", "Balanco", "outdoor", 1.5, 0.6, 1.8, "#A08060"),
    ("planter-large", "Vaso grande", "outdoor", 0.5, 0.5, 0.6, "#8B4513"),
    ("rug-small", "Tapete pequeno", "decor", 1.2, 0.8, 0.02, "#B39978"),
    ("rug-medium", "Tapete medio", "decor", 2.0, 1.4, 0.02, "#A08060"),
    ("rug-large", "Tapete grande", "decor", 3.0, 2.0, 0.02, "#8B7050"),
    ("mirror-floor", "Espelho corpo inteiro", "decor", 0.5, 0.05, 1.6, "#C0D0E0"),
    ("picture-frame", "Quadro", "decor", 0.6, 0.03, 0.45, "#DAA520"),
    ("clock", "Relogio parede", "decor", 0.3, 0.05, 0.3, "#333333"),
    ("vase", "Vaso decorativo", "decor", 0.2, 0.2, 0.35, "#CD853F"),
    ("curtain", "Cortina", "decor", 1.5, 0.1, 2.4, "#D2B48C"),
    ("file-cabinet", "Gaveteiro", "office", 0.4, 0.5, 0.7, "#888888"),
    ("file-cabinet-tall", "Arquivo alto", "office", 0.45, 0.6, 1.35, "#888888"),
    ("whiteboard", "Quadro branco", "office", 1.2, 0.05, 0.9, "#F5F5F5"),
    ("meeting-table", "Mesa reuniao", "office", 2.4, 1.2, 0.76, "#7B6040"),
    ("reception-desk", "Recepcao", "office", 1.8, 0.7, 1.1, "#6B5B45"),
    ("locker", "Locker", "office", 0.3, 0.5, 1.8, "#999999"),
    ("safe", "Cofre", "office", 0.4, 0.4, 0.5, "#555555"),
    ("paper-shredder", "Fragmentadora", "office", 0.35, 0.25, 0.55, "#666666"),
    ("washer", "Maquina lavar", "laundry", 0.6, 0.6, 0.85, "#E0E0E0"),
    ("dryer", "Secadora", "laundry", 0.6, 0.6, 0.85, "#D8D8D8"),
    ("washer-dryer", "Lava e seca", "laundry", 0.6, 0.65, 0.85, "#E0E0E0"),
    ("laundry-sink", "Tanque", "laundry", 0.55, 0.55, 0.85, "#F0F0F0"),
    ("ironing-board", "Tabua passar", "laundry", 0.35, 1.2, 0.9, "#C0C0C0"),
    ("drying-rack", "Varal de chao", "laundry", 0.55, 1.3, 1.0, "#AAAAAA"),
    ("door-single", "Porta simples", "doors", 0.9, 0.08, 2.1, "#A08060"),
    ("door-double", "Porta dupla", "doors", 1.6, 0.08, 2.1, "#A08060"),
    ("door-sliding", "Porta correr", "doors", 1.2, 0.08, 2.1, "#8B7050"),
    ("door-folding", "Porta sanfonada", "doors", 0.9, 0.08, 2.1, "#D2B48C"),
    ("door-pocket", "Porta embutida", "doors", 0.8, 0.08, 2.1, "#A08060"),
    ("door-glass", "Porta vidro", "doors", 0.9, 0.08, 2.1, "#B0D0E0"),
    ("ac-split", "Ar condicionado split", "appliances", 0.8, 0.2, 0.28, "#E0E0E0"),
    ("ac-window", "Ar condicionado janela", "appliances", 0.55, 0.55, 0.38, "#D0D0D0"),
    ("heater", "Aquecedor", "appliances", 0.4, 0.2, 0.6, "#CCCCCC"),
    ("water-heater", "Aquecedor agua", "appliances", 0.4, 0.35, 0.6, "#E0E0E0"),
    ("fan-stand", "Ventilador pedestal", "appliances", 0.45, 0.45, 1.3, "#AAAAAA"),
    ("vacuum", "Aspirador", "appliances", 0.35, 0.35, 1.1, "#444444"),
    ("dehumidifier", "Desumidificador", "appliances", 0.35, 0.25, 0.55, "#E0E0E0"),
    ("purifier", "Purificador ar", "appliances", 0.25, 0.25, 0.55, "#F0F0F0"),
    ("plant-small", "Planta pequena", "plants", 0.25, 0.25, 0.35, "#228B22"),
    ("plant-medium", "Planta media", "plants", 0.4, 0.4, 0.7, "#228B22"),
    ("plant-tall", "Planta grande", "plants", 0.5, 0.5, 1.5, "#006400"),
    ("plant-tree", "Arvore interna", "plants", 0.6, 0.6, 2.0, "#006400"),
    ("cactus", "Cacto", "plants", 0.15, 0.15, 0.4, "#2E8B57"),
    ("bonsai", "Bonsai", "plants", 0.3, 0.3, 0.35, "#228B22"),
    ("hanging-plant", "Planta pendente", "plants", 0.3, 0.3, 0.6, "#32CD32"),
    ("flower-pot", "Vaso flores", "plants", 0.2, 0.2, 0.3, "#FF6347"),
]

_default: FurnitureCatalog | None = None


def default_catalog() -> FurnitureCatalog:
    """The catalogue shipped with the editor (built once, then shared)."""
    global _default
    if _default is None:
        _default = FurnitureCatalog(
            (
                CatalogItem(
                    id=i, name=n, category=c, width=w, depth=d, height=h, color=col,
                )
                for i, n, c, w, d, h, col in _ITEMS
            ),
            (CatalogCategory(id=i, name=n) for i, n in _CATEGORIES),
        )
    return _default
