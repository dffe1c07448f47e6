"""
StatsRepository - read-only aggregations over group data.

Supplies the inputs of the balance computation:
1. The group roster, in membership order
2. Per-user sums of expenses paid
3. Per-user sums of expense shares owed
4. Per-user sums of settlement payments sent and received

Database errors are not caught here. A failed fetch must surface as an error,
never as a zero balance.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId

from groupsplit.models.base import to_decimal
from groupsplit.models.ledger import GroupMember, MembershipStatus
from groupsplit.models.stats import ExpensePeriodTotal, PayerTotal, PERIOD_FORMATS, TimeFrame


class StatsRepository:
    """Repository for group statistics."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.groups = db["groups"]
        self.group_members = db["group_members"]
        self.expenses = db["expenses"]
        self.payments = db["payments"]

    async def get_group(self, group_id: str) -> Optional[Dict[str, Any]]:
        """Get a group by id, or None if the id is malformed or unknown."""
        if not ObjectId.is_valid(group_id):
            return None
        return await self.groups.find_one({"_id": ObjectId(group_id)})

    async def get_members(self, group_id: str) -> List[GroupMember]:
        """List active group members with their profile, oldest membership first.

        Pending and rejected join requests are not members.
        """
        pipeline = [
            {"$match": {"group_id": ObjectId(group_id), "status": MembershipStatus.ACTIVE.value}},
            {"$sort": {"joined_at": 1, "user_id": 1}},
            {
                "$lookup": {
                    "from": "users",
                    "localField": "user_id",
                    "foreignField": "_id",
                    "as": "user"
                }
            },
            {"$unwind": {"path": "$user", "preserveNullAndEmptyArrays": True}},
            {
                "$project": {
                    "_id": 0,
                    "user_id": 1,
                    "first_name": {"$ifNull": ["$user.first_name", ""]},
                    "last_name": {"$ifNull": ["$user.last_name", ""]},
                    "email": "$user.email",
                    "avatar_url": "$user.avatar_url"
                }
            }
        ]
        docs = await self.group_members.aggregate(pipeline).to_list(None)
        return [GroupMember(**doc) for doc in docs]

    async def sum_paid_by_user(self, group_id: str) -> Dict[str, Decimal]:
        """Sum of expense amounts per paying user."""
        return await self._sum_by(
            self.expenses, {"group_id": ObjectId(group_id)}, "paid_by_id"
        )

    async def sum_owed_by_user(self, group_id: str) -> Dict[str, Decimal]:
        """Sum of expense shares per user, across the group's expenses."""
        pipeline = [
            {"$match": {"group_id": ObjectId(group_id)}},
            {
                "$lookup": {
                    "from": "expense_shares",
                    "localField": "_id",
                    "foreignField": "expense_id",
                    "as": "shares"
                }
            },
            {"$unwind": "$shares"},
            {"$group": {"_id": "$shares.user_id", "total": {"$sum": "$shares.amount"}}}
        ]
        docs = await self.expenses.aggregate(pipeline).to_list(None)
        return self._totals(docs)

    async def sum_sent_by_user(self, group_id: str) -> Dict[str, Decimal]:
        """Sum of settlement payments per payer."""
        return await self._sum_by(
            self.payments, {"group_id": ObjectId(group_id)}, "payer_id"
        )

    async def sum_received_by_user(self, group_id: str) -> Dict[str, Decimal]:
        """Sum of settlement payments per receiver."""
        return await self._sum_by(
            self.payments, {"group_id": ObjectId(group_id)}, "receiver_id"
        )

    async def expense_time_series(
        self, group_id: str, time_frame: TimeFrame
    ) -> List[ExpensePeriodTotal]:
        """Total expenses per period (day, ISO week, month or year), oldest first."""
        pipeline = [
            {"$match": {"group_id": ObjectId(group_id)}},
            {
                "$group": {
                    "_id": {
                        "$dateToString": {
                            "format": PERIOD_FORMATS[time_frame],
                            "date": "$date"
                        }
                    },
                    "total": {"$sum": "$amount"}
                }
            },
            {"$sort": {"_id": 1}}
        ]
        docs = await self.expenses.aggregate(pipeline).to_list(None)
        return [
            ExpensePeriodTotal(period=doc["_id"], total=doc["total"])
            for doc in docs
            if doc["_id"] is not None
        ]

    async def expenses_by_payer(self, group_id: str) -> List[PayerTotal]:
        """Total expenses per payer with the payer's name, largest first."""
        pipeline = [
            {"$match": {"group_id": ObjectId(group_id)}},
            {"$group": {"_id": "$paid_by_id", "total": {"$sum": "$amount"}}},
            {
                "$lookup": {
                    "from": "users",
                    "localField": "_id",
                    "foreignField": "_id",
                    "as": "payer"
                }
            },
            {"$unwind": {"path": "$payer", "preserveNullAndEmptyArrays": True}},
            {
                "$project": {
                    "_id": 0,
                    "user_id": "$_id",
                    "first_name": {"$ifNull": ["$payer.first_name", ""]},
                    "last_name": {"$ifNull": ["$payer.last_name", ""]},
                    "total": 1
                }
            },
            {"$sort": {"total": -1, "user_id": 1}}
        ]
        docs = await self.expenses.aggregate(pipeline).to_list(None)
        return [PayerTotal(**doc) for doc in docs]

    # ===== PRIVATE HELPERS =====

    async def _sum_by(self, collection, match: Dict[str, Any], key: str) -> Dict[str, Decimal]:
        pipeline = [
            {"$match": match},
            {"$group": {"_id": f"${key}", "total": {"$sum": "$amount"}}}
        ]
        docs = await collection.aggregate(pipeline).to_list(None)
        return self._totals(docs)

    @staticmethod
    def _totals(docs: List[Dict[str, Any]]) -> Dict[str, Decimal]:
        """Map aggregation rows {_id: user, total} to {user_id: Decimal}."""
        return {
            str(doc["_id"]): to_decimal(doc["total"])
            for doc in docs
            if doc["_id"] is not None
        }
