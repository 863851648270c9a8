# tests/test_mapper.py
import pytest
from datetime import datetime, timezone
from eth_explorer.chain.erc20 import TRANSFER_EVENT_TOPIC, address_topic
from eth_explorer.explorer import mapper

MINER = "0x95222290DD7278Aa3Ddd389Cc1E1d165CC4BAfe5"
SENDER = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
RECIPIENT = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"
TOKEN = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
BLOCK_HASH = bytes.fromhex("11" * 32)
TX_HASH = bytes.fromhex("22" * 32)


class TestMapper:
    @pytest.fixture
    def block(self):
        return {
            "number": 17000000,
            "hash": BLOCK_HASH,
            "parentHash": bytes.fromhex("33" * 32),
            "timestamp": 1681338455,
            "miner": MINER,
            "gasLimit": 30000000,
            "gasUsed": 12345678,
            "difficulty": 58750003716598352816469,
            "size": 61234,
            "transactions": [TX_HASH, bytes.fromhex("44" * 32)],
        }

    @pytest.fixture
    def transaction(self):
        return {
            "hash": TX_HASH,
            "blockHash": BLOCK_HASH,
            "blockNumber": 17000000,
            "transactionIndex": 3,
            "from": SENDER,
            "to": RECIPIENT,
            "value": 1_500_000_000_000_000_000,
            "gas": 21000,
            "gasPrice": 30_000_000_000,
            "nonce": 7,
            "input": b"",
        }

    @pytest.fixture
    def receipt(self):
        return {
            "blockHash": BLOCK_HASH,
            "blockNumber": 17000000,
            "transactionIndex": 3,
            "gasUsed": 21000,
            "status": 1,
        }

    def test_block(self, block):
        model = mapper.block_to_model(block)
        assert model.number == "17000000"
        assert model.hash == "0x" + "11" * 32
        assert model.parent_hash == "0x" + "33" * 32
        assert model.timestamp == datetime(2023, 4, 12, 22, 27, 35, tzinfo=timezone.utc)
        assert model.miner == MINER
        assert model.gas_limit == "30000000"
        assert model.gas_used == "12345678"
        assert model.difficulty == "58750003716598352816469"
        assert model.size == "61234"
        assert model.transactions == ["0x" + "22" * 32, "0x" + "44" * 32]

    def test_block_with_full_transactions(self, block, transaction):
        block["transactions"] = [transaction]
        assert mapper.block_to_model(block).transactions == ["0x" + "22" * 32]

    def test_pending_transaction_omits_block_fields(self, transaction):
        transaction.update(blockHash=None, blockNumber=None, transactionIndex=None)
        model = mapper.transaction_to_model(transaction)
        dumped = model.model_dump(by_alias=True, exclude_none=True)
        for field in ("block_number", "block_hash", "transaction_index", "status", "gas_used"):
            assert field not in dumped
        assert dumped["from"] == SENDER
        assert dumped["value"] == "1.500000000000000000"
        assert dumped["gas_price"] == "30.000000000"

    def test_mined_transaction(self, transaction, receipt):
        model = mapper.transaction_to_model(transaction, receipt)
        assert model.block_number == "17000000"
        assert model.block_hash == "0x" + "11" * 32
        assert model.transaction_index == "3"
        assert model.gas_used == "21000"
        assert model.status == "1"
        assert model.nonce == "7"
        assert model.input == "0x"

    def test_failed_transaction_status(self, transaction, receipt):
        receipt["status"] = 0
        assert mapper.transaction_to_model(transaction, receipt).status == "0"

    def test_contract_creation_has_no_recipient(self, transaction, receipt):
        transaction["to"] = None
        model = mapper.transaction_to_model(transaction, receipt)
        assert model.to is None
        assert "to" not in model.model_dump(by_alias=True, exclude_none=True)

    def test_etherscan_transaction(self):
        entry = {
            "blockNumber": "14923678",
            "timeStamp": "1654646411",
            "hash": "0x" + "aa" * 32,
            "nonce": "6",
            "blockHash": "0x" + "bb" * 32,
            "transactionIndex": "61",
            "from": SENDER.lower(),
            "to": "",
            "value": "0",
            "gas": "6385876",
            "gasPrice": "83924748773",
            "isError": "0",
            "txreceipt_status": "1",
            "input": "0x6080",
            "contractAddress": RECIPIENT.lower(),
            "gasUsed": "6385876",
        }
        model = mapper.etherscan_transaction_to_model(entry)
        assert model.block_number == "14923678"
        assert model.transaction_index == "61"
        assert model.to is None
        assert model.value == "0.000000000000000000"
        assert model.gas_price == "83.924748773"
        assert model.gas_used == "6385876"
        assert model.status == "1"
        assert model.input == "0x6080"

    def test_etherscan_transaction_status_from_is_error(self):
        entry = {
            "hash": "0x" + "aa" * 32, "from": SENDER, "to": RECIPIENT, "value": "1",
            "gas": "21000", "gasPrice": "1", "nonce": "0", "input": "0x",
            "isError": "1", "txreceipt_status": "",
        }
        assert mapper.etherscan_transaction_to_model(entry).status == "0"

    def test_balance_and_gas_price(self):
        balance = mapper.balance_to_model(SENDER, 2 ** 80)
        assert balance.balance_wei == str(2 ** 80)
        assert balance.balance == "1208925.819614629174706176"
        gas = mapper.gas_price_to_model(12_345_678_901)
        assert gas.gas_price == "12.345678901"
        assert gas.gas_price_wei == "12345678901"

    def test_token_balance_decodes_word(self):
        result = (123_456_789 * 10 ** 12).to_bytes(32, "big")
        model = mapper.token_balance_to_model(SENDER, TOKEN, result)
        assert model.balance == str(123_456_789 * 10 ** 12)

    def test_event_log(self):
        log = {
            "address": TOKEN,
            "topics": [bytes.fromhex(TRANSFER_EVENT_TOPIC[2:])],
            "data": bytes.fromhex("00" * 31 + "05"),
            "blockNumber": 100,
            "blockHash": BLOCK_HASH,
            "transactionHash": TX_HASH,
            "transactionIndex": 2,
            "logIndex": 9,
            "removed": True,
        }
        model = mapper.log_to_event_log(log)
        assert model.topics == [TRANSFER_EVENT_TOPIC]
        assert model.data == "0x" + "00" * 31 + "05"
        assert model.block_number == "100"
        assert model.tx_hash == "0x" + "22" * 32
        assert model.tx_index == "2"
        assert model.log_index == "9"
        assert model.removed is True

    def test_token_transfer(self):
        log = {
            "address": TOKEN,
            "topics": [TRANSFER_EVENT_TOPIC, address_topic(SENDER), address_topic(RECIPIENT)],
            "data": (10 ** 6).to_bytes(32, "big"),
            "blockNumber": 100,
            "blockHash": BLOCK_HASH,
            "transactionHash": TX_HASH,
        }
        model = mapper.log_to_token_transfer(log)
        dumped = model.model_dump(by_alias=True)
        assert dumped["from"] == SENDER
        assert dumped["to"] == RECIPIENT
        assert dumped["value"] == "1000000"
        assert dumped["token_address"] == TOKEN
        assert dumped["block_hash"] == "0x" + "11" * 32

    def test_contract_source(self):
        entry = {"SourceCode": "contract A {}", "ContractName": "A", "CompilerVersion": "v0.8.19"}
        model = mapper.contract_source_to_model(TOKEN, entry)
        assert model.source_code == "contract A {}"
        assert model.contract_name == "A"
        assert model.compiler_version == "v0.8.19"

    def test_models_are_frozen(self, block):
        model = mapper.block_to_model(block)
        with pytest.raises(Exception):
            model.number = "1"
