"""
Manul Manor API — FastAPI endpoints.

Exposes the pet engine to an external UI:
- State snapshot and item catalog
- Care (feed, clean, play)
- Shop and inventory
- Room placement and wearables
- Weekly quiz
- Rewards, feedback and the scheduler tick
"""

from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from manul_manor.catalog.items import ItemCatalog, UnknownItemError
from manul_manor.clock import Clock
from manul_manor.models.config import EngineConfig
from manul_manor.models.item import Item, Position
from manul_manor.persistence.store import KeyValueStore
from manul_manor.scheduler.loop import PetScheduler
from manul_manor.service.pet_service import PetService


# --- Request/Response Models ---

class FeedRequest(BaseModel):
    item_id: Optional[str] = None


class PurchaseRequest(BaseModel):
    item_id: str


class NameRequest(BaseModel):
    name: str


class PlaceRequest(BaseModel):
    x: float
    y: float


class AnswerRequest(BaseModel):
    question_index: int
    answer_index: int


class GrantRequest(BaseModel):
    quantity: int = 1


class XPRequest(BaseModel):
    amount: int


# --- Application Factory ---

def create_app(
    service: Optional[PetService] = None,
    store: Optional[KeyValueStore] = None,
    clock: Optional[Clock] = None,
    catalog: Optional[ItemCatalog] = None,
    config: Optional[EngineConfig] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Manul Manor API",
        description="Virtual Pallas cat care engine",
        version="1.0.0",
    )

    svc = service or PetService(store=store, clock=clock, catalog=catalog, config=config)
    scheduler = PetScheduler(svc)

    app.state.service = svc
    app.state.scheduler = scheduler

    def resolve(item_id: str) -> Item:
        try:
            return svc.catalog.require(item_id)
        except UnknownItemError:
            raise HTTPException(404, f"Item not found: {item_id}")

    def result(ok: bool) -> dict:
        return {"ok": ok, "state": svc.snapshot().model_dump(mode="json")}

    # === STATE ===

    @app.get("/state")
    def get_state():
        """Current pet snapshot."""
        return svc.snapshot().model_dump(mode="json")

    @app.get("/catalog")
    def get_catalog():
        """Every item the shop knows about."""
        return [i.model_dump(mode="json") for i in svc.catalog.all()]

    @app.get("/config")
    def get_config():
        return svc.config.model_dump()

    # === CARE ===

    @app.post("/pet/feed")
    def feed(req: FeedRequest):
        """Feed the pet, with basic food when no item is given."""
        food = resolve(req.item_id) if req.item_id else None
        return result(svc.feed(food))

    @app.post("/pet/clean")
    def clean():
        svc.clean()
        return result(True)

    @app.post("/pet/play")
    def play():
        svc.play()
        return result(True)

    @app.post("/pet/rename")
    def rename(req: NameRequest):
        return result(svc.rename(req.name))

    @app.post("/pet/xp")
    def grant_xp(req: XPRequest):
        """Admin XP grant."""
        gained = svc.add_xp(req.amount)
        return {"levels_gained": gained, "state": svc.snapshot().model_dump(mode="json")}

    @app.post("/onboarding/complete")
    def complete_onboarding(req: NameRequest):
        if not req.name:
            raise HTTPException(422, "Name must not be empty")
        svc.complete_onboarding(req.name)
        return result(True)

    # === SHOP & INVENTORY ===

    @app.post("/shop/purchase")
    def purchase(req: PurchaseRequest):
        return result(svc.purchase(resolve(req.item_id)))

    @app.get("/inventory")
    def get_inventory():
        """Owned items with usability flags."""
        entries = []
        for entry in svc.state.inventory:
            item = svc.catalog.get(entry.item_id)
            entries.append({
                **entry.model_dump(mode="json"),
                "can_use": svc.can_use(item) if item is not None else False,
            })
        return entries

    @app.post("/inventory/{item_id}/grant")
    def grant_items(item_id: str, req: GrantRequest):
        """Admin/reward path: add consumables without payment."""
        svc.add_items(resolve(item_id), req.quantity)
        return {"quantity": svc.quantity(item_id)}

    @app.post("/inventory/{item_id}/place")
    def place_item(item_id: str, req: PlaceRequest):
        return result(svc.place(resolve(item_id), Position(x=req.x, y=req.y)))

    @app.delete("/inventory/{item_id}/place")
    def remove_item(item_id: str):
        return result(svc.remove(resolve(item_id)))

    @app.post("/inventory/{item_id}/wear")
    def wear_item(item_id: str):
        return result(svc.wear(resolve(item_id)))

    @app.delete("/inventory/{item_id}/wear")
    def unwear_item(item_id: str):
        return result(svc.unwear(resolve(item_id)))

    # === QUIZ ===

    @app.get("/quiz")
    def get_quiz():
        quiz = svc.state.quiz
        if quiz is None:
            raise HTTPException(404, "No quiz available")
        return quiz.model_dump(mode="json")

    @app.post("/quiz/check")
    def check_weekly_quiz():
        return {"generated": svc.check_weekly()}

    @app.post("/quiz/answer")
    def answer_question(req: AnswerRequest):
        correct = svc.submit_answer(req.question_index, req.answer_index)
        return {"correct": correct, "state": svc.snapshot().model_dump(mode="json")}

    # === REWARDS & FEEDBACK ===

    @app.delete("/rewards")
    def clear_rewards():
        cleared = svc.clear_rewards()
        return {"cleared": len(cleared)}

    @app.delete("/feedback")
    def dismiss_feedback():
        svc.dismiss_feedback()
        return {"status": "dismissed"}

    # === SCHEDULER ===

    @app.post("/scheduler/tick")
    def scheduler_tick():
        """Run whichever periodic jobs are due now."""
        ran: List[str] = scheduler.tick()
        return {"ran": ran, "next_due": scheduler.next_due().isoformat()}

    return app


# Default application instance
app = create_app()
