"""
stocklink quickstart: issue and check a link without a server or Shopify.

Run:
    python examples/quickstart.py
"""
from stocklink import LinkSigner

signer = LinkSigner(secret="demo-secret-do-not-use-in-production")

claims, token = signer.issue(target_id="44551234", direction=-1, ttl=3600)
print(f"Claims: {claims}")
print(f"Link:   http://localhost:3000/adjust?vi={claims.target_id}&d={claims.direction}"
      f"&exp={claims.expiry}&sig={token}")

result = signer.verify(claims.target_id, str(claims.direction), str(claims.expiry), token)
print(f"Fresh link:      {result.status}")

result = signer.verify(claims.target_id, "1", str(claims.expiry), token)
print(f"Flipped delta:   {result.status}")

result = signer.verify(claims.target_id, str(claims.direction), str(claims.expiry), token,
                       now=claims.expiry + 1)
print(f"After expiry:    {result.status}")
