import json
import re

from errors import OracleResponseError

def parse_llm_json(text: str):
    if not text or not text.strip():
        raise OracleResponseError("Empty response from the scoring oracle.")
    cleaned = re.sub(r"```(?:json)?", "", text, flags=re.IGNORECASE).strip()
    cleaned = cleaned.strip("`").strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        # Fallback: attempt to find the first '{' and last '}'
        start = cleaned.find('{')
        end = cleaned.rfind('}') + 1
        if start != -1 and end != 0:
            try:
                return json.loads(cleaned[start:end])
            except json.JSONDecodeError:
                pass
        raise OracleResponseError(f"Scoring oracle did not return valid JSON. Error: {e}")
