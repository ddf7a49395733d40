import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from flask import jsonify
from flask_openapi3 import Info, Tag
from flask_openapi3 import OpenAPI

from bonding_engine.common import config
from bonding_engine.common.enums import OrderSide
from bonding_engine.common.errors import CurveError, Unauthorized
from bonding_engine.common.math import BASIS_POINTS, MAX_U64
from bonding_engine.common.model import CurveState, TransactionRequest
from bonding_engine.curves import transitions
from bonding_engine.curves.single.linear import LinearBondingCurve
from bonding_engine.validation.linear_validator import LinearCurveValidator

logger = logging.getLogger(__name__)


class CurveTransactionAction(Enum):
    buy = "buy"
    sell = "sell"


class CurveStateModel(BaseModel):
    creator: str = Field(description="Opaque identity of the curve creator")
    creator_id: int = Field(0, ge=0, le=MAX_U64, description="Identifier of the curve instance")
    slope: int = Field(ge=0, le=MAX_U64, description="Price increase per unit of supply")
    initial_price: int = Field(ge=0, le=MAX_U64, description="Price of the first unit")
    reserve_ratio: int = Field(ge=0, le=BASIS_POINTS, description="Basis points of a sell refund paid out")
    current_supply: int = Field(0, ge=0, le=MAX_U64, description="Units in circulation")
    total_reserve: int = Field(0, ge=0, le=MAX_U64, description="Currency held against circulation")
    token_mint: Optional[str] = Field(None, description="Opaque asset handle")
    reserve_vault: Optional[str] = Field(None, description="Opaque reserve custody handle")

    def to_state(self) -> CurveState:
        return CurveState(**self.model_dump())


class CurveTransactionRequest(BaseModel):
    state: CurveStateModel
    action: CurveTransactionAction = Field(description="API action to perform")
    amount: int = Field(ge=0, description="amount to buy / sell")
    user_id: Optional[str] = Field(None, description="Buyer or seller identity, echoed in the event")


class CurveStatusRequest(BaseModel):
    state: CurveStateModel


class FeeWithdrawalRequest(BaseModel):
    state: CurveStateModel
    caller: str = Field(description="Identity requesting the withdrawal, already authenticated")
    amount: int = Field(ge=0, description="amount of fees to withdraw")


curve_action_tag = Tag(
    name="Bonding Curve Transaction",
    description="Apply a buy, sell or fee withdrawal to a curve state and get the settlement amount",
)

curve_status_tag = Tag(
    name="Bonding Curve Status",
    description="Inspect fees and invariants of a curve state",
)


def _transition_response(outcome):
    return jsonify({
        "amount": outcome.amount,
        "event": outcome.event.to_dict(),
        "state": outcome.state.to_dict(),
    })


def create_app() -> OpenAPI:
    info = Info(title="Bonding Curve API", version="1.0.0")
    app = OpenAPI(__name__, info=info)

    @app.errorhandler(CurveError)
    def handle_curve_error(e: CurveError):
        logger.warning("Rejected request [%s]: %s", e.code, e)
        status = 403 if isinstance(e, Unauthorized) else 400
        return jsonify({"error": e.code.name, "message": str(e)}), status

    @app.errorhandler(ValueError)
    def handle_value_error(e: ValueError):
        return jsonify({"error": "INVALID_STATE", "message": str(e)}), 400

    @app.post("/curve/transaction", summary="Curve Transaction", tags=[curve_action_tag])
    def transaction(body: CurveTransactionRequest):
        """
        Handles a buy or sell operation on a curve.
        The caller settles the returned amount and persists the returned state.
        """
        events = []
        curve = LinearBondingCurve(body.state.to_state(), listeners=[events.append])

        side = OrderSide.from_str(body.action.name)
        req_inner = TransactionRequest(order_type=side, amount=body.amount, user_id=body.user_id)

        result = curve.execute(req_inner)
        return jsonify({
            "amount": result.total_cost,
            "event": events[0].to_dict(),
            "state": curve.state.to_dict(),
        })

    @app.post("/curve/withdraw", summary="Withdraw Fees", tags=[curve_action_tag])
    def withdraw(body: FeeWithdrawalRequest):
        """
        Releases accumulated fees to the creator.
        """
        outcome = transitions.withdraw_fees(body.state.to_state(), body.caller, body.amount)
        return _transition_response(outcome)

    @app.post("/curve/fees", summary="Curve Fees", tags=[curve_status_tag])
    def fees(body: CurveStatusRequest):
        """
        Return the spot price, the minimum reserve and the fees currently withdrawable.
        """
        curve = LinearBondingCurve(body.state.to_state())
        return jsonify({
            "spot_price": curve.get_spot_price(curve.current_supply),
            "minimum_reserve": curve.minimum_reserve(),
            "available_fees": curve.available_fees(),
        })

    @app.post("/curve/validate", summary="Curve Validation", tags=[curve_status_tag])
    def validate(body: CurveStatusRequest):
        """
        Run the linear curve validator against a state.
        """
        curve = LinearBondingCurve(body.state.to_state())
        return jsonify(LinearCurveValidator.run_all_validations(curve))

    return app


app = create_app()


def main():
    logging.basicConfig(level=config.LOG_LEVEL)
    app.run(host=config.API_HOST, port=config.API_PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
