# backend/app/routers/payments.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..auth import Identity, require_member
from ..clients.payment_gateway import PaymentGatewayClient, get_payment_gateway
from ..repositories import Repositories, get_repos
from ..schemas import CheckoutSessionIn, CheckoutSessionOut, OpResult, PaymentCreate, PaymentOut
from ..services.payment_ledger import settle

log = logging.getLogger("buildcare.payments")

router = APIRouter(tags=["payments"])


@router.post("/create-checkout-session", response_model=CheckoutSessionOut)
def create_checkout_session(
    payload: CheckoutSessionIn,
    gateway: PaymentGatewayClient = Depends(get_payment_gateway),
    member: Identity = Depends(require_member),
):
    auth = gateway.authorize_payment(payload.price)
    log.info("payment authorized", extra={"email": member.email})
    return CheckoutSessionOut(clientSecret=auth.client_secret)


@router.post("/payments", response_model=OpResult)
def create_payment(
    payload: PaymentCreate,
    accept_request_id: str = Query(..., alias="acceptRequestId"),
    email: str = Query(..., min_length=3),
    repos: Repositories = Depends(get_repos),
    member: Identity = Depends(require_member),
):
    return settle(repos, email=email, contract_id=accept_request_id, payload=payload, actor_email=member.email)


@router.get("/paymentHistory/{email}", response_model=Optional[PaymentOut])
def payment_history(
    email: str,
    repos: Repositories = Depends(get_repos),
    _member: Identity = Depends(require_member),
):
    return repos.payments.get(email)
