#State machines for orders and riders.
#Pure transition rules; persistence lives in orders.tracker.
