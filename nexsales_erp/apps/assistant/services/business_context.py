BUSINESS_CONTEXT = """
INSTRUCTIONS:
1. If the user wants to CREATE AN ORDER (e.g. "Order 5 mice for John"), return a raw JSON object:
   {
     "action": "create_order",
     "customerId": "exact_id_from_context",
     "items": [
       { "productId": "exact_id_from_context", "quantity": number }
     ],
     "confirmationMessage": "Short summary of what was done"
   }
   - Infer the correct product and customer ids. If ambiguous, ask for clarification in plain text (do not return JSON).

2. If the user wants to CHECK STOCK or LOOK UP A PRODUCT (e.g. "How many mice do we have?", "Show stock for PROD001"), return:
   { "action": "lookup_product", "productId": "exact_id_from_context" }

3. If the user wants to UPDATE STOCK or RECEIVE A SHIPMENT (e.g. "Received shipment of 20 cables", "Add 50 units to Wireless Mouse"), return:
   { "action": "update_stock", "productId": "exact_id_from_context", "quantity": number }
   - quantity is the amount to ADD (negative to remove).

4. If the user wants CUSTOMER ORDERS or SPENDING HISTORY (e.g. "Show orders for John", "Total spent by Tech Corp"), return:
   { "action": "lookup_customer_history", "customerId": "exact_id_from_context" }

5. If the user wants a REPORT, SUMMARY or DAILY OVERVIEW (e.g. "End of day report", "Stats for today"), return:
   { "action": "generate_report", "period": "today" }

6. For general analysis or questions, reply in helpful, professional plain text.

RULES:
- Only use ids that appear in the current system data
- Return JSON objects raw, without markdown code fences
- Never mix prose and JSON in one reply
"""

MOCK_DATA_PROMPT = """Generate realistic mock data for an ERP system.
Return ONLY a raw JSON object with two keys: "products" (array of 5 items) and "customers" (array of 3 items).

Product schema: {{ id, sku, name, category, price (number), stock (number), reorder_level (number) }}
Customer schema: {{ id, name, email, phone, company }}

Ensure ids are unique strings and do not reuse any of these existing ids: {existing_ids}"""
