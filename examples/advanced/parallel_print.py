"""Free-threading safe — pretty print 1000 docs in parallel."""

from concurrent.futures import ThreadPoolExecutor

from prettymark import prettify

docs = ["Doc " + str(i) + "\n---\n\n* Content for __document__ " + str(i) for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(prettify, docs))

print(f"Printed {len(results)} documents in parallel")
print("First doc:", results[0])
